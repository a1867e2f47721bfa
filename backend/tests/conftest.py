"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Settings are read at import time: point them at SQLite before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("ENVIRONMENT", "test")

import base64
from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sales_api.core.dependencies import get_cache_service
from sales_api.main import app
from sales_api.models import Base, Customer, LineItem, Product, Sale
from sales_api.services.media import ImageStorage, get_image_storage
from shared.infrastructure.cache import MemoryCacheService
from shared.infrastructure.db import enable_sqlite_foreign_keys, get_db


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def png_data_uri(content: bytes = PNG_BYTES) -> str:
    """Base64 data URI as sent by clients for product images."""
    return "data:image/png;base64," + base64.b64encode(content).decode("ascii")


@pytest.fixture
def image_data_uri():
    """A valid PNG data URI for product payloads."""
    return png_data_uri()


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    # Create all tables
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def cache():
    """Fresh in-process cache for each test."""
    return MemoryCacheService()


@pytest.fixture
def image_storage(tmp_path):
    """Image storage writing below the test's temporary directory."""
    return ImageStorage(tmp_path / "media")


@pytest.fixture(scope="function")
def client(db_session, cache, image_storage):
    """
    Create a test client with database session, cache and media overrides.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_service] = lambda: cache
    app.dependency_overrides[get_image_storage] = lambda: image_storage

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def session_client(db_session, cache, image_storage):
    """
    Test client that opens a new database session per request, like
    get_db does in production. Objects loaded by one request are not in
    the identity map of the next.
    """
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_service] = lambda: cache
    app.dependency_overrides[get_image_storage] = lambda: image_storage

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed_customers(db_session):
    """Create the two default customers."""
    customers = [
        Customer(name="Cliente 1", phone="11987654321", company="Empresa 1"),
        Customer(name="Cliente 2", phone="11987654322", company="Empresa 2"),
    ]
    db_session.add_all(customers)
    db_session.commit()
    return customers


@pytest.fixture
def seed_products(db_session):
    """Create the two default products."""
    products = [
        Product(name="Produto 1", price=Decimal("100.00"), image="Imagem1.png"),
        Product(name="Produto 2", price=Decimal("200.00"), image="Imagem2.png"),
    ]
    db_session.add_all(products)
    db_session.commit()
    return products


@pytest.fixture
def seed_sale(db_session, seed_customers, seed_products):
    """Create one sale for Cliente 1 with a single Produto 1 item."""
    sale = Sale(
        date=datetime(2025, 9, 1),
        total_amount=Decimal("100.00"),
        customer_id=seed_customers[0].id,
        items=[
            LineItem(
                quantity=1,
                unit_price=Decimal("100.00"),
                product_id=seed_products[0].id,
            )
        ],
    )
    db_session.add(sale)
    db_session.commit()
    return sale
