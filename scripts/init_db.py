# scripts/init_db.py
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from decimal import Decimal

from shoepos.core.config import settings
from shoepos.core.database import Database
from shoepos.schemas.stock import RestockRequest
from shoepos.services.inventory import StockLedger

DEMO_STOCK = [
    RestockRequest(
        name="Air Zoom Pegasus",
        brand="Nike",
        article_number="AX1",
        color="rojo",
        unit_price=Decimal("50"),
        quantities_by_size={"9": 2, "10": 1},
    ),
    RestockRequest(
        name="Superstar",
        brand="Adidas",
        article_number="SS80",
        color="blanco",
        unit_price=Decimal("45.50"),
        quantities_by_size={"8": 3, "8.5": 2, "9": 4},
    ),
]


def create_initial_data(with_demo: bool = False):
    """Crear tablas y, opcionalmente, stock de prueba"""
    database = Database(settings.DATABASE_URL)
    database.connect()
    print("✅ Tablas creadas")

    if with_demo:
        with database.get_db() as db:
            ledger = StockLedger(db)
            for request in DEMO_STOCK:
                result = ledger.restock(request)
                print(
                    f"✅ {request.brand} {request.article_number}: "
                    f"{result['inserted_count']} nuevos, {result['updated_count']} actualizados"
                )

    database.disconnect()

if __name__ == "__main__":
    create_initial_data(with_demo="--demo" in sys.argv)
