from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from foodshare.config.database import build_engine, create_tables, get_db
from foodshare.schemas.business import BusinessCreate
from foodshare.schemas.product import ProductCreate
from foodshare.services.business.business_service import BusinessService
from foodshare.services.product.product_service import ProductService

BUSINESS_ID = "biz-1"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def now():
    return datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def business(db):
    return BusinessService.create_business(
        db,
        BusinessCreate(name="Le Jardin Bio", type="Restaurant", address="123 Rue des Jardins"),
        business_id=BUSINESS_ID,
    )


@pytest.fixture
def salade(db, business):
    return ProductService.create_product(
        db,
        BUSINESS_ID,
        ProductCreate(name="Salade", category="Plats", unit_price="12.80", current_stock=5),
    )


@pytest.fixture
def client(session_factory, business):
    from foodshare.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with_header = TestClient(app, headers={"X-Business-ID": BUSINESS_ID})
    yield with_header
    app.dependency_overrides.clear()
