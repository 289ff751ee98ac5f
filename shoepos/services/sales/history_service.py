# shoepos/services/sales/history_service.py
import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional, Sequence, Union

from sqlalchemy.orm import Session

from shoepos.core.exceptions import NotFoundError, ValidationError, parse_record_id
from shoepos.core.utils import to_naive_utc
from shoepos.models.sale import Sale, SaleItem
from shoepos.schemas.sale import SaleItemPatch, SaleItemReplace
from shoepos.services.sales.repository import SaleRepository
from shoepos.services.sales.sales_service import line_total

logger = logging.getLogger(__name__)


def parse_item_index(raw: Union[int, str]) -> int:
    if isinstance(raw, bool):
        raise ValidationError("Índice de item inválido")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ValidationError(f"Índice de item inválido: {raw}")


class SaleHistoryEditor:
    """
    Consulta y corrección de ventas ya registradas.

    Las correcciones sólo tocan el documento de la venta: no devuelven stock
    ni recalculan `profit`, sólo `total_amount`.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = SaleRepository(db)

    def get_sale(self, sale_id: Union[int, str]) -> Sale:
        sale_id = parse_record_id(sale_id, "venta")
        sale = self.repository.get(sale_id)
        if sale is None:
            raise NotFoundError(f"Venta no encontrada: {sale_id}")
        return sale

    def list_sales(
        self,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Dict:
        """Ventas de la más reciente a la más antigua, con el total vendido"""
        date_from = to_naive_utc(date_from)
        date_to = to_naive_utc(date_to)
        if date_from and date_to and date_from > date_to:
            raise ValidationError("La fecha inicial es posterior a la fecha final")

        sales = self.repository.list(date_from, date_to)
        total_amount = sum(
            (Decimal(item.total_amount) for sale in sales for item in sale.items),
            Decimal("0"),
        )
        return {"sales": sales, "count": len(sales), "total_amount": total_amount}

    def replace_items(self, sale_id: Union[int, str], new_items: Sequence[SaleItemReplace]) -> Sale:
        """
        Reemplazar todos los items de la venta.

        Si una línea no trae `shoeInfo` o `profit`, se conservan los de la
        línea anterior en la misma posición cuando es el mismo SKU; si no hay
        línea anterior comparable, quedan vacíos y `profit` en 0.
        """
        if not new_items:
            raise ValidationError("La venta debe tener al menos un item")
        sale = self.get_sale(sale_id)
        previous_items = list(sale.items)

        items = []
        for position, item in enumerate(new_items):
            previous = None
            if position < len(previous_items) and previous_items[position].sku_code == item.sku_code:
                previous = previous_items[position]

            if item.shoe_info is not None:
                shoe_info = item.shoe_info.model_dump()
            elif previous is not None:
                shoe_info = previous.shoe_info
            else:
                shoe_info = {}

            profit = item.profit
            if profit is None:
                profit = previous.profit if previous is not None else Decimal("0")

            items.append({
                "sku_code": item.sku_code,
                "quantity": item.quantity,
                "sell_price": item.sell_price,
                "discount": item.discount,
                "profit": profit,
                "total_amount": line_total(item.quantity, item.sell_price, item.discount),
                "name": shoe_info.get("name"),
                "brand": shoe_info.get("brand"),
                "article_number": shoe_info.get("article_number"),
                "size": shoe_info.get("size"),
                "color": shoe_info.get("color"),
            })

        sale = self.repository.replace_items(sale, items)
        logger.info(f"✏️ Venta {sale.id}: items reemplazados ({len(items)})")
        return sale

    def patch_item(
        self,
        sale_id: Union[int, str],
        item_index: Union[int, str],
        patch: SaleItemPatch,
    ) -> SaleItem:
        """Corregir cantidad/precio/descuento de un item; los demás quedan igual"""
        sale = self.get_sale(sale_id)
        index = parse_item_index(item_index)
        if index < 0 or index >= len(sale.items):
            raise NotFoundError(f"Item {index} no encontrado en la venta {sale.id}")

        item = sale.items[index]
        changes = patch.model_dump(exclude_none=True)
        for field, value in changes.items():
            setattr(item, field, value)
        item.total_amount = line_total(item.quantity, item.sell_price, item.discount)

        item = self.repository.save_item(item)
        logger.info(f"✏️ Venta {sale.id}: item {index} actualizado {sorted(changes)}")
        return item
