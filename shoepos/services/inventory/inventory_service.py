# shoepos/services/inventory/inventory_service.py
import logging
import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.orm import Session

from shoepos.core.exceptions import NotFoundError, ValidationError, parse_record_id
from shoepos.core.identity import (
    batch_timestamp,
    sku_fingerprint,
    strip_unit_suffix,
    traceable_code,
)
from shoepos.core.utils import utcnow
from shoepos.models.stock import StockRecord
from shoepos.schemas.stock import RestockRequest, StockRecordUpdate
from shoepos.services.inventory.repository import StockRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "brand", "color", "size", "quantity_on_hand", "unit_price")
IDENTITY_FIELDS = ("brand", "article_number", "size")

CENTS = Decimal("0.01")
# Tope de pares por talla en una sola reposición (una etiqueta por par)
MAX_PAIRS_PER_SIZE = 10000


def to_cents(value: Decimal) -> Decimal:
    """Redondear a centavos, igual que la columna Numeric(10, 2)"""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def parse_count(value: Any) -> Optional[int]:
    """Cantidad de pares: entero positivo o None si no es válida"""
    number = _to_decimal(value)
    if number is None or number <= 0 or number != number.to_integral_value():
        return None
    return int(number)


def parse_size(value: Any) -> Optional[float]:
    number = _to_decimal(value)
    if number is None or number <= 0:
        return None
    size = float(number)
    return size if math.isfinite(size) else None


def normalize_article_number(article_number: Optional[str]) -> Optional[str]:
    if article_number is None:
        return None
    article_number = str(article_number).strip()
    return article_number or None


class StockLedger:
    """Libro de stock: reposición con fusión, descuentos por venta y stock agrupado"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = StockRepository(db)

    def restock(self, request: RestockRequest) -> Dict:
        """Fusionar o insertar cada talla y generar un código por par recibido"""
        article_number = normalize_article_number(request.article_number)
        unit_price = request.unit_price
        if unit_price is None or unit_price < 0:
            raise ValidationError("El precio por par debe ser un número >= 0")
        # La búsqueda de fusión compara contra el valor ya guardado en centavos
        unit_price = to_cents(unit_price)

        entries = []
        for raw_size, raw_count in request.quantities_by_size.items():
            count = parse_count(raw_count)
            size = parse_size(raw_size)
            if count is None or size is None:
                logger.debug(f"⏭️ Talla ignorada: {raw_size!r} -> {raw_count!r}")
                continue
            if count > MAX_PAIRS_PER_SIZE:
                raise ValidationError(
                    f"Cantidad demasiado grande para la talla {raw_size}: "
                    f"máximo {MAX_PAIRS_PER_SIZE} pares por reposición"
                )
            entries.append((size, count))

        inserted_count = 0
        updated_count = 0
        traceable_units = []
        timestamp = batch_timestamp()
        sequence = 0

        for size, count in entries:
            existing = self.repository.find_by_merge_key(
                request.name, request.brand, article_number, request.color, size, unit_price
            )

            if existing is not None and self.repository.increment(existing.id, count):
                updated_count += 1
            else:
                self.repository.insert(
                    StockRecord(
                        name=request.name,
                        brand=request.brand,
                        article_number=article_number,
                        color=request.color,
                        size=size,
                        quantity_on_hand=count,
                        unit_price=unit_price,
                        sku_code=sku_fingerprint(request.brand, article_number, size),
                        created_at=utcnow(),
                    )
                )
                inserted_count += 1

            # Un código por cada par físico
            for _ in range(count):
                traceable_units.append({
                    "brand": request.brand,
                    "article_number": article_number,
                    "size": size,
                    "code": traceable_code(
                        request.brand, article_number, size, timestamp, sequence
                    ),
                })
                sequence += 1

        logger.info(
            f"📦 Reposición {request.brand} {article_number or 'NA'}: "
            f"{inserted_count} nuevos, {updated_count} actualizados, "
            f"{len(traceable_units)} etiquetas"
        )

        return {
            "message": "Zapatos agregados/actualizados correctamente",
            "inserted_count": inserted_count,
            "updated_count": updated_count,
            "traceable_units": traceable_units,
        }

    def current_stock(self) -> List[Dict]:
        return self.repository.grouped_stock()

    def find_by_sku_code(self, sku_code: str) -> Optional[StockRecord]:
        if not sku_code:
            return None
        return self.repository.find_by_sku_code(sku_code.strip())

    def get_by_sku_code(self, sku_code: str) -> StockRecord:
        record = self.find_by_sku_code(sku_code)
        if record is None:
            raise NotFoundError(f"Producto no encontrado para el código: {sku_code}")
        return record

    def resolve_scanned_code(self, code: str) -> StockRecord:
        """
        Buscar por código escaneado.

        Primero coincidencia exacta; si no, se quita "-timestamp-secuencia" de
        la etiqueta y se busca por la huella. El precio devuelto es el actual
        del registro, no el que tenía el par al llegar.
        """
        record = self.find_by_sku_code(code)
        if record is None:
            fingerprint = strip_unit_suffix(code)
            if fingerprint:
                record = self.find_by_sku_code(fingerprint)
        if record is None:
            raise NotFoundError(f"Producto no encontrado para el código: {code}")
        return record

    def decrement_if_available(self, record_id: int, quantity: int) -> bool:
        return self.repository.decrement_if_available(record_id, quantity)

    def increment(self, record_id: int, quantity: int) -> bool:
        return self.repository.increment(record_id, quantity)

    def get(self, record_id: Union[int, str]) -> StockRecord:
        record_id = parse_record_id(record_id, "stock")
        record = self.repository.get(record_id)
        if record is None:
            raise NotFoundError(f"Registro de stock no encontrado: {record_id}")
        return record

    def update(self, record_id: Union[int, str], patch: StockRecordUpdate) -> StockRecord:
        """Corrección manual de un registro; sin lógica de fusión"""
        record = self.get(record_id)
        changes = patch.model_dump(exclude_unset=True)

        for field in REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"El campo {field} no puede ser nulo")
        if "article_number" in changes:
            changes["article_number"] = normalize_article_number(changes["article_number"])
        if "unit_price" in changes:
            changes["unit_price"] = to_cents(changes["unit_price"])

        for field, value in changes.items():
            setattr(record, field, value)

        if any(field in changes for field in IDENTITY_FIELDS):
            record.sku_code = sku_fingerprint(record.brand, record.article_number, record.size)

        record = self.repository.save(record)
        logger.info(f"✏️ Registro de stock {record.id} actualizado: {sorted(changes)}")
        return record
