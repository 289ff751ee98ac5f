# shoepos/models/__init__.py
from .stock import StockRecord
from .sale import Sale, SaleItem

__all__ = ["StockRecord", "Sale", "SaleItem"]
