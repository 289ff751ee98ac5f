# shoepos/schemas/stock.py
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import Field

from shoepos.schemas.base import CamelModel


class RestockRequest(CamelModel):
    name: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    article_number: Optional[str] = None
    color: str = Field(..., min_length=1)
    unit_price: Decimal = Field(..., ge=0, decimal_places=2)
    # talla -> cantidad; las entradas no numéricas se ignoran al reponer
    quantities_by_size: Dict[Any, Any] = Field(default_factory=dict)


class TraceableUnit(CamelModel):
    brand: str
    article_number: Optional[str] = None
    size: float
    code: str


class RestockResult(CamelModel):
    message: str
    inserted_count: int
    updated_count: int
    traceable_units: List[TraceableUnit] = []


class StockRecordOut(CamelModel):
    id: int
    name: str
    brand: str
    article_number: Optional[str] = None
    color: str
    size: float
    quantity_on_hand: int
    unit_price: float
    sku_code: str
    created_at: datetime


class StockGroupOut(CamelModel):
    """Una fila del stock agrupado por SKU lógico"""
    id: int
    name: str
    brand: str
    article_number: Optional[str] = None
    color: str
    size: float
    unit_price: float
    quantity_on_hand: int
    sku_code: str
    created_at: datetime


class StockRecordUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    brand: Optional[str] = Field(None, min_length=1)
    article_number: Optional[str] = None
    color: Optional[str] = Field(None, min_length=1)
    size: Optional[float] = Field(None, gt=0)
    quantity_on_hand: Optional[int] = Field(None, ge=0)
    unit_price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
