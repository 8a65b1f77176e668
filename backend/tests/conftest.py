"""Pytest configuration and fixtures."""

import io
import os
import pytest
from datetime import datetime, timezone
from typing import Generator

# Keep the app's own engine off the filesystem during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from fastapi.testclient import TestClient
from reportlab.pdfgen import canvas
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.rbac import ROLE_HEADER, UserRole
from app.db.base import Base
from app.db.session import get_db
from app.main import app
# Import all models to ensure they're registered with Base.metadata
from app.models import *
from app.models.job_order import (
    Company,
    FinalStatus,
    OrderStatus,
    SkuType,
    SupplyChoice,
    UnitType,
)
from app.schemas.job_order import JobOrder, MaterialRow, ProductSpec, SupplySource
from app.services.job_order_pdf.layout import PAGE_SIZE, S_TEXT
from app.services.job_order_pdf.surface import FontPair, PageSurface

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    # Disable rate limiter during tests to avoid flaky failures
    from app.core.rate_limit import limiter as global_limiter
    global_limiter.enabled = False
    # Don't raise server exceptions so we can test error status codes
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    global_limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture
def sales_headers() -> dict:
    return {ROLE_HEADER: UserRole.SALES.value}


@pytest.fixture
def planner_headers() -> dict:
    return {ROLE_HEADER: UserRole.PLANNER.value}


# ============== Job order data ==============


@pytest.fixture
def sample_product() -> ProductSpec:
    """A fully filled first product."""
    return ProductSpec(
        product_name="Fish Oil 1000mg",
        order_quantity=500,
        unit_type=UnitType.BOX,
        categories=["Traditional & Health Supplement"],
        product_types=["Softgel", "Others"],
        product_types_others="Chewable softgel",
        packing_types=["HDPE White Bottle"],
        weight_per_item="1.2g",
        qty_per_bottle="60",
        qty_per_box_set="1",
        qty_per_carton="48",
        supply_source=SupplySource(
            raw_material=SupplyChoice.CUSTOMER,
            bottle=SupplyChoice.HALAGEL,
            carton=SupplyChoice.HALAGEL,
        ),
    )


@pytest.fixture
def make_order(sample_product):
    """Factory for job orders; keyword arguments override the defaults."""
    def _make(**overrides) -> JobOrder:
        data = dict(
            id="abc123xyz",
            created_at=datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc),
            status=OrderStatus.PENDING_PLANNER,
            company=Company.PRODUCTS,
            customer_name="Nutri Sdn Bhd",
            po_number="PO-1001",
            sku_type=SkuType.NEW,
            est_delivery_date="2026-11-15",
            product=sample_product,
            sales_prepared_by="Aina",
            sales_date="2026-10-01",
        )
        data.update(overrides)
        return JobOrder(**data)

    return _make


@pytest.fixture
def completed_order(make_order) -> JobOrder:
    return make_order(
        status=OrderStatus.COMPLETED,
        job_order_no="JO-77",
        section_b_date="2026-10-03",
        materials=[
            MaterialRow(item_code="RM-01", material_name="Fish oil", qty_required=100, stock_balance=40),
            MaterialRow(item_code="PK-02", material_name="HDPE bottle", qty_required=10, stock_balance=15),
        ],
        remarks="Rush order\nConfirm label artwork",
        planner_prepared_by="Hafiz",
        planner_prepared_date="2026-10-03",
        completion_date="2026-10-20",
        final_status=FinalStatus.PENDING,
        qty_delivered="300",
        pending_reason="Awaiting cartons",
    )


# ============== Drawing helpers ==============


class RecordingSurface(PageSurface):
    """PageSurface that keeps a log of every primitive it draws."""

    def __init__(self, c, **kwargs):
        super().__init__(c, **kwargs)
        self.calls = []

    def text(self, x, y, value, size=S_TEXT, bold=False, align="left", max_length=None):
        self.calls.append(("text", x, y, value))
        super().text(x, y, value, size=size, bold=bold, align=align, max_length=max_length)

    def box(self, x, y, w, h):
        self.calls.append(("box", x, y, w, h))
        super().box(x, y, w, h)

    def filled_box(self, x, y, w, h, color):
        self.calls.append(("filled_box", x, y, w, h))
        super().filled_box(x, y, w, h, color)

    def line(self, x1, y1, x2, y2):
        self.calls.append(("line", x1, y1, x2, y2))
        super().line(x1, y1, x2, y2)

    def tick(self, x, y):
        self.calls.append(("tick", x, y))
        super().tick(x, y)

    def image(self, image, x, y, w, h):
        self.calls.append(("image", x, y, w, h))
        super().image(image, x, y, w, h)

    def of_kind(self, kind):
        return [call[1:] for call in self.calls if call[0] == kind]

    @property
    def ticks(self):
        return self.of_kind("tick")

    @property
    def texts(self):
        return [call[2] for call in self.of_kind("text")]


class RecordingCanvas(canvas.Canvas):
    """Canvas that remembers every drawString call."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.drawn = []

    def drawString(self, x, y, text, *args, **kwargs):
        self.drawn.append((x, y, text))
        return super().drawString(x, y, text, *args, **kwargs)


@pytest.fixture
def pdf_canvas() -> RecordingCanvas:
    return RecordingCanvas(io.BytesIO(), pagesize=PAGE_SIZE)


@pytest.fixture
def surface(pdf_canvas) -> RecordingSurface:
    return RecordingSurface(pdf_canvas, fonts=FontPair())


@pytest.fixture
def png_logo() -> bytes:
    """A 20x10 PNG."""
    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (20, 10), (200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def recording_canvas_class():
    """Base class for canvases that need to misbehave in a test."""
    return RecordingCanvas


@pytest.fixture
def make_surface():
    def _make(c) -> RecordingSurface:
        return RecordingSurface(c, fonts=FontPair())

    return _make
