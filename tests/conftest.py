# tests/conftest.py
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from shoepos.core.database import Database
from shoepos.main import create_app
from shoepos.schemas.stock import RestockRequest
from shoepos.services.inventory import StockLedger
from shoepos.services.sales import SaleHistoryEditor, SaleRepository, SalesService


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.connect()
    yield database
    database.disconnect()


@pytest.fixture
def db_session(database):
    with database.get_db() as session:
        yield session


@pytest.fixture
def ledger(db_session):
    return StockLedger(db_session)


@pytest.fixture
def sales_service(db_session):
    return SalesService(db_session)


@pytest.fixture
def history(db_session):
    return SaleHistoryEditor(db_session)


@pytest.fixture
def sale_repository(db_session):
    return SaleRepository(db_session)


@pytest.fixture
def restock(ledger):
    """Reponer con valores por defecto tipo Nike AX1 rojo a 50"""

    def _restock(quantities_by_size, **overrides):
        data = {
            "name": "Air Zoom",
            "brand": "Nike",
            "article_number": "AX1",
            "color": "red",
            "unit_price": Decimal("50"),
            "quantities_by_size": quantities_by_size,
        }
        data.update(overrides)
        return ledger.restock(RestockRequest(**data))

    return _restock


@pytest.fixture
def make_item():
    """Item de venta ya calculado, para crear ventas directamente"""

    def _make_item(sku_code="Nike-AX1-9", quantity=1, sell_price="60", discount="0", profit="10"):
        sell_price = Decimal(sell_price)
        discount = Decimal(discount)
        return {
            "sku_code": sku_code,
            "quantity": quantity,
            "sell_price": sell_price,
            "discount": discount,
            "profit": Decimal(profit),
            "total_amount": sell_price * quantity - discount,
            "name": "Air Zoom",
            "brand": "Nike",
            "article_number": "AX1",
            "size": 9.0,
            "color": "red",
        }

    return _make_item


@pytest.fixture
def client(database):
    app = create_app(database)
    with TestClient(app) as client:
        yield client
