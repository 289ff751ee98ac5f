# shoepos/schemas/report.py
from datetime import datetime
from typing import Optional

from shoepos.schemas.base import CamelModel


class SalesSummary(CamelModel):
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    sales_count: int
    items_sold: int
    total_amount: float
    total_profit: float
    total_discount: float


class StockSummary(CamelModel):
    sku_count: int
    total_pairs: int
    stock_value: float
