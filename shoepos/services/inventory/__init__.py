# shoepos/services/inventory/__init__.py
from .inventory_service import StockLedger
from .repository import StockRepository

__all__ = ["StockLedger", "StockRepository"]
