# shoepos/services/sales/sales_service.py
"""
Procesamiento de ventas.

Una venta se hace en dos fases, sin transacción entre registros:

1. Validar todo el carrito contra el stock actual (nada se modifica).
2. Descontar cada línea con un UPDATE condicional (`stock >= cantidad`).
   Si una línea falla porque otro vendedor se llevó el stock, se devuelven
   las cantidades ya descontadas y la venta se rechaza con ConflictError.

Si el stock ya se descontó pero el INSERT de la venta falla, el error sube
como StorageError; ese stock no se devuelve automáticamente.
"""
import logging
from decimal import Decimal
from typing import Dict, List, Sequence, Tuple

from sqlalchemy.orm import Session

from shoepos.core.exceptions import ConflictError, StorageError, ValidationError
from shoepos.models.stock import StockRecord
from shoepos.schemas.sale import CartItem
from shoepos.services.inventory import StockLedger
from shoepos.services.sales.repository import SaleRepository

logger = logging.getLogger(__name__)


def line_total(quantity: int, sell_price: Decimal, discount: Decimal) -> Decimal:
    return Decimal(quantity) * Decimal(sell_price) - Decimal(discount)


def line_profit(quantity: int, sell_price: Decimal, cost_price: Decimal) -> Decimal:
    return (Decimal(sell_price) - Decimal(cost_price)) * Decimal(quantity)


class SalesService:

    def __init__(self, db: Session):
        self.db = db
        self.ledger = StockLedger(db)
        self.repository = SaleRepository(db)

    def sell(self, cart: Sequence[CartItem]) -> int:
        """Registrar una venta completa y devolver su id"""
        if not cart:
            raise ValidationError("El carrito está vacío")
        for item in cart:
            self._validate_cart_item(item)

        # Fase 1: validar todo antes de tocar nada
        lines: List[Tuple[CartItem, int]] = []
        sale_items: List[Dict] = []
        requested: Dict[int, int] = {}

        for item in cart:
            record = self.ledger.get_by_sku_code(item.sku_code)
            total_requested = requested.get(record.id, 0) + item.quantity
            if record.quantity_on_hand < total_requested:
                raise ConflictError(
                    f"Stock insuficiente para el código: {item.sku_code} "
                    f"(disponible {record.quantity_on_hand}, solicitado {total_requested})",
                    sku_code=item.sku_code,
                )
            requested[record.id] = total_requested
            lines.append((item, record.id))
            sale_items.append(self._build_sale_item(item, record))

        # Fase 2: descuentos condicionales con compensación
        applied: List[Tuple[int, int]] = []
        failed_sku = None
        try:
            for item, record_id in lines:
                if not self.ledger.decrement_if_available(record_id, item.quantity):
                    failed_sku = item.sku_code
                    break
                applied.append((record_id, item.quantity))
        except StorageError:
            self._compensate(applied)
            raise

        if failed_sku is not None:
            self._compensate(applied)
            raise ConflictError(
                f"Stock insuficiente para el código: {failed_sku}",
                sku_code=failed_sku,
            )

        try:
            sale = self.repository.create(sale_items)
        except StorageError:
            logger.error(
                f"❌ Stock descontado pero la venta no se guardó: "
                f"{[(record_id, qty) for record_id, qty in applied]}"
            )
            raise

        logger.info(f"🛒 Venta {sale.id} registrada: {len(sale_items)} items")
        return sale.id

    def _validate_cart_item(self, item: CartItem) -> None:
        if not item.sku_code or not item.quantity or item.unit_sell_price is None:
            raise ValidationError("Datos inválidos en un item del carrito")
        if item.quantity < 0 or item.unit_sell_price < 0 or item.discount < 0:
            raise ValidationError("Datos inválidos en un item del carrito")

    def _build_sale_item(self, item: CartItem, record: StockRecord) -> Dict:
        return {
            "sku_code": record.sku_code,
            "quantity": item.quantity,
            "sell_price": item.unit_sell_price,
            "discount": item.discount,
            "profit": line_profit(item.quantity, item.unit_sell_price, record.unit_price),
            "total_amount": line_total(item.quantity, item.unit_sell_price, item.discount),
            "name": record.name,
            "brand": record.brand,
            "article_number": record.article_number,
            "size": record.size,
            "color": record.color,
        }

    def _compensate(self, applied: List[Tuple[int, int]]) -> None:
        """Devolver al stock las líneas ya descontadas"""
        for record_id, quantity in reversed(applied):
            self.ledger.increment(record_id, quantity)
        if applied:
            logger.warning(f"↩️ Venta abortada, {len(applied)} descuentos revertidos")
