# shoepos/services/sales/__init__.py
from .sales_service import SalesService
from .history_service import SaleHistoryEditor
from .repository import SaleRepository

__all__ = ["SalesService", "SaleHistoryEditor", "SaleRepository"]
