"""Job order models and enumerations."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import JSON, Enum as SQLEnum, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin


class OrderStatus(str, Enum):
    """Lifecycle status of a job order."""

    PENDING_PLANNER = "PENDING_PLANNER"
    COMPLETED = "COMPLETED"


class Company(str, Enum):
    """Legal entity the job order is raised for."""

    PLANT = "Halagel Plant (M) Sdn Bhd"
    PRODUCTS = "Halagel Products Sdn Bhd"
    MALAYSIA = "Halagel Malaysia Sdn Bhd"


class SkuType(str, Enum):
    EXISTING = "Existing"
    NEW = "New"


class UnitType(str, Enum):
    """Unit the order quantity is counted in."""

    BOTTLE = "Bottle"
    BLISTER = "Blister"
    BOX = "Box"
    TUBE = "Tube"
    OTHERS = "Others"


class ProductCategory(str, Enum):
    TRADITIONAL_HEALTH_SUPPLEMENT = "Traditional & Health Supplement"
    TOOTHPASTE_COSMETICS = "Toothpaste & Cosmetics"
    FOOD_BEVERAGES = "Food & Beverages"


class ProductType(str, Enum):
    SOFTGEL = "Softgel"
    HARD_CAPSULE = "Hard Capsule"
    TOOTHPASTE = "Toothpaste"
    LIQUID = "Liquid"
    COSMETICS = "Cosmetics"
    FOOD = "Food"


class PackingType(str, Enum):
    HDPE_WHITE_BOTTLE = "HDPE White Bottle"
    AMBER_GLASS_BOTTLE = "Amber Glass Bottle"
    PET_AMBER_GLASS_BOTTLE = "PET Amber Glass Bottle"


# Selection value shared by every specification group for the free-text slot
OTHERS_OPTION = "Others"


class SupplyChoice(str, Enum):
    """Who supplies a packaging or raw material item."""

    CUSTOMER = "Customer"
    HALAGEL = "Halagel"


class SupplyItem(str, Enum):
    """Material items tracked in the requirement section.

    Values match the field names on ``SupplySource``.
    """

    RAW_MATERIAL = "raw_material"
    BOTTLE = "bottle"
    LABELING = "labeling"
    INNER_BOX = "inner_box"
    CAP = "cap"
    CAP_SEAL = "cap_seal"
    STOPPER = "stopper"
    PVC_FOIL = "pvc_foil"
    ALUM_FOIL = "alum_foil"
    SHRINKWRAP = "shrinkwrap"
    CARTON = "carton"
    INSERT = "insert"
    OTHERS = "others"


class FinalStatus(str, Enum):
    """Disposition recorded by the planner."""

    CLOSED = "Closed"
    PENDING = "Pending"
    DELIVERED = "Delivered"


# Column widths of the list-view copies; the schemas enforce the same limits
PO_NUMBER_MAX_LENGTH = 100
CUSTOMER_NAME_MAX_LENGTH = 255


class JobOrderRecord(Base, TimestampMixin):
    """Stored job order.

    The full record lives in ``payload``; the scalar columns are copies used
    by the list view. ``created_at`` is the order's own creation time.
    """

    __tablename__ = "job_orders"

    id: Mapped[str] = mapped_column(String(16), primary_key=True)
    status: Mapped[OrderStatus] = mapped_column(
        SQLEnum(OrderStatus), default=OrderStatus.PENDING_PLANNER, nullable=False, index=True
    )
    po_number: Mapped[str] = mapped_column(
        String(PO_NUMBER_MAX_LENGTH), nullable=False, default="", index=True
    )
    customer_name: Mapped[str] = mapped_column(String(CUSTOMER_NAME_MAX_LENGTH), nullable=False, default="")
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
