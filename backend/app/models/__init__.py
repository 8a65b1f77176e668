"""SQLAlchemy models."""

from app.models.job_order import (
    JobOrderRecord,
    OrderStatus,
    Company,
    SkuType,
    UnitType,
    ProductCategory,
    ProductType,
    PackingType,
    SupplyChoice,
    SupplyItem,
    FinalStatus,
    OTHERS_OPTION,
)
