"""Job order schemas.

``JobOrder`` is the full record shared by the store, the API and the PDF
renderer. All record models are frozen; edits go through ``model_copy``.
"""

from __future__ import annotations

import secrets
import string
from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from app.models.job_order import (
    CUSTOMER_NAME_MAX_LENGTH,
    PO_NUMBER_MAX_LENGTH,
    Company,
    FinalStatus,
    OrderStatus,
    SkuType,
    SupplyChoice,
    SupplyItem,
    UnitType,
)

_ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 9


def generate_id() -> str:
    """Opaque 9-character id used for orders and material rows."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(ID_LENGTH))


class SupplySource(BaseModel):
    """Customer-vs-Halagel responsibility per material item.

    Each item holds a single value, so at most one side can be selected.
    """

    model_config = ConfigDict(frozen=True)

    raw_material: Optional[SupplyChoice] = None
    bottle: Optional[SupplyChoice] = None
    labeling: Optional[SupplyChoice] = None
    inner_box: Optional[SupplyChoice] = None
    cap: Optional[SupplyChoice] = None
    cap_seal: Optional[SupplyChoice] = None
    stopper: Optional[SupplyChoice] = None
    pvc_foil: Optional[SupplyChoice] = None
    alum_foil: Optional[SupplyChoice] = None
    shrinkwrap: Optional[SupplyChoice] = None
    carton: Optional[SupplyChoice] = None
    insert: Optional[SupplyChoice] = None
    others: Optional[SupplyChoice] = None

    def entries(self) -> List[Tuple[SupplyItem, Optional[SupplyChoice]]]:
        """Every item with its current choice, in print order."""
        return [
            (SupplyItem.RAW_MATERIAL, self.raw_material),
            (SupplyItem.BOTTLE, self.bottle),
            (SupplyItem.LABELING, self.labeling),
            (SupplyItem.INNER_BOX, self.inner_box),
            (SupplyItem.CAP, self.cap),
            (SupplyItem.CAP_SEAL, self.cap_seal),
            (SupplyItem.STOPPER, self.stopper),
            (SupplyItem.PVC_FOIL, self.pvc_foil),
            (SupplyItem.ALUM_FOIL, self.alum_foil),
            (SupplyItem.SHRINKWRAP, self.shrinkwrap),
            (SupplyItem.CARTON, self.carton),
            (SupplyItem.INSERT, self.insert),
            (SupplyItem.OTHERS, self.others),
        ]

    def choice_for(self, item: SupplyItem) -> Optional[SupplyChoice]:
        for entry_item, choice in self.entries():
            if entry_item == item:
                return choice
        return None

    def toggle(self, item: SupplyItem, choice: SupplyChoice) -> "SupplySource":
        """Select ``choice`` for ``item``; selecting the active choice clears it."""
        new_value = None if self.choice_for(item) == choice else choice
        return self.model_copy(update={item.value: new_value})


class ProductSpec(BaseModel):
    """Detail, specification and requirement data for one product."""

    model_config = ConfigDict(frozen=True)

    product_name: str = ""
    order_quantity: int = Field(default=0, ge=0)
    unit_type: UnitType = UnitType.BOTTLE

    categories: List[str] = Field(default_factory=list)
    categories_others: Optional[str] = None
    product_types: List[str] = Field(default_factory=list)
    product_types_others: Optional[str] = None
    packing_types: List[str] = Field(default_factory=list)
    packing_types_others: Optional[str] = None

    weight_per_item: str = ""

    qty_per_bottle: Optional[str] = None
    qty_per_blister: Optional[str] = None
    qty_per_box_set: Optional[str] = None
    qty_per_carton: Optional[str] = None

    supply_source: SupplySource = Field(default_factory=SupplySource)

    @field_validator("categories", "product_types", "packing_types", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []

    @field_validator("supply_source", mode="before")
    @classmethod
    def none_as_unset(cls, v):
        return v if v is not None else SupplySource()


class MaterialRow(BaseModel):
    """A material line entered by the planner.

    ``qty_to_order`` is derived from the two inputs on every access and is
    ignored when supplied.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    item_code: str = ""
    material_name: str = ""
    qty_required: float = 0
    stock_balance: float = 0
    pr_no: str = ""

    @computed_field
    @property
    def qty_to_order(self) -> float:
        return max(0, self.qty_required - self.stock_balance)


class JobOrder(BaseModel):
    """Full job order record spanning the sales and planner sections."""

    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime
    status: OrderStatus = OrderStatus.PENDING_PLANNER

    # Header
    company: Company = Company.PLANT
    customer_name: str = Field(default="", max_length=CUSTOMER_NAME_MAX_LENGTH)
    po_number: str = Field(default="", max_length=PO_NUMBER_MAX_LENGTH)
    sku_type: SkuType = SkuType.EXISTING
    est_delivery_date: str = ""

    product: ProductSpec = Field(default_factory=ProductSpec)
    product2: Optional[ProductSpec] = None

    # Section A signatures
    sales_prepared_by: Optional[str] = None
    sales_approved_by: Optional[str] = None
    sales_received_by: Optional[str] = None
    sales_date: Optional[str] = None

    # Section B
    job_order_no: Optional[str] = None
    section_b_date: Optional[str] = None
    materials: List[MaterialRow] = Field(default_factory=list)
    remarks: Optional[str] = None

    planner_prepared_by: Optional[str] = None
    planner_prepared_date: Optional[str] = None
    planner_reviewed_by: Optional[str] = None
    planner_reviewed_date: Optional[str] = None
    planner_approved_by: Optional[str] = None
    planner_approved_date: Optional[str] = None
    planner_received_by: Optional[str] = None
    planner_received_date: Optional[str] = None

    # Footer
    completion_date: Optional[str] = None
    final_status: Optional[FinalStatus] = None
    qty_delivered: Optional[str] = None
    pending_reason: Optional[str] = None

    @field_validator("materials", mode="before")
    @classmethod
    def none_as_no_rows(cls, v):
        return v or []


# --- Request / response schemas ---


class JobOrderCreate(BaseModel):
    """Sales submission.

    ``product2`` is only kept when ``has_product2`` is set; when set without a
    body the second product starts blank.
    """

    company: Company = Company.PLANT
    customer_name: str = Field(default="", max_length=CUSTOMER_NAME_MAX_LENGTH)
    po_number: str = Field(default="", max_length=PO_NUMBER_MAX_LENGTH)
    sku_type: SkuType = SkuType.EXISTING
    est_delivery_date: str = ""

    product: ProductSpec = Field(default_factory=ProductSpec)
    has_product2: bool = False
    product2: Optional[ProductSpec] = None

    sales_prepared_by: Optional[str] = None
    sales_approved_by: Optional[str] = None
    sales_received_by: Optional[str] = None
    sales_date: Optional[str] = None

    @model_validator(mode="after")
    def resolve_product2(self):
        if not self.has_product2:
            self.product2 = None
        elif self.product2 is None:
            self.product2 = ProductSpec()
        return self


class PlannerUpdate(BaseModel):
    """Planner save. Every save records a final status."""

    final_status: FinalStatus

    job_order_no: Optional[str] = None
    section_b_date: Optional[str] = None
    materials: List[MaterialRow] = Field(default_factory=list)
    remarks: Optional[str] = None

    planner_prepared_by: Optional[str] = None
    planner_prepared_date: Optional[str] = None
    planner_reviewed_by: Optional[str] = None
    planner_reviewed_date: Optional[str] = None
    planner_approved_by: Optional[str] = None
    planner_approved_date: Optional[str] = None
    planner_received_by: Optional[str] = None
    planner_received_date: Optional[str] = None

    completion_date: Optional[str] = None
    qty_delivered: Optional[str] = None
    pending_reason: Optional[str] = None


class JobOrderSummary(BaseModel):
    """Row in the job order list view."""

    id: str
    po_number: str
    customer_name: str
    product_name: str
    est_delivery_date: str
    status: OrderStatus
    created_at: datetime
