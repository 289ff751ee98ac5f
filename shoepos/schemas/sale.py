# shoepos/schemas/sale.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from shoepos.schemas.base import CamelModel


class CartItem(CamelModel):
    sku_code: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    unit_sell_price: Decimal = Field(..., ge=0)
    discount: Decimal = Field(Decimal("0"), ge=0)


class SellRequest(CamelModel):
    cart: List[CartItem] = []


class SellResponse(CamelModel):
    message: str
    sale_id: int


class ShoeInfo(CamelModel):
    name: Optional[str] = None
    brand: Optional[str] = None
    article_number: Optional[str] = None
    size: Optional[float] = None
    color: Optional[str] = None


class SaleItemOut(CamelModel):
    sku_code: str
    quantity: int
    sell_price: float
    discount: float
    profit: float
    total_amount: float
    shoe_info: ShoeInfo


class SaleOut(CamelModel):
    id: int
    items: List[SaleItemOut]
    sold_at: datetime


class SaleListOut(CamelModel):
    sales: List[SaleOut]
    count: int
    total_amount: float


class SaleItemReplace(CamelModel):
    sku_code: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    sell_price: Decimal = Field(..., ge=0)
    discount: Decimal = Field(Decimal("0"), ge=0)
    # si se omiten, se conservan los de la línea anterior en la misma posición
    profit: Optional[Decimal] = None
    shoe_info: Optional[ShoeInfo] = None


class ReplaceItemsRequest(CamelModel):
    items: List[SaleItemReplace] = []


class SaleItemPatch(CamelModel):
    quantity: Optional[int] = Field(None, gt=0)
    sell_price: Optional[Decimal] = Field(None, ge=0)
    discount: Optional[Decimal] = Field(None, ge=0)


class PatchItemResponse(CamelModel):
    message: str
    updated_item: SaleItemOut
