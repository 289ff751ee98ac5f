# shoepos/services/inventory/repository.py
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import and_, case, func
from sqlalchemy.orm import Session

from shoepos.core.database import storage_guard
from shoepos.models.stock import StockRecord

MERGE_KEY = (
    StockRecord.name,
    StockRecord.brand,
    StockRecord.article_number,
    StockRecord.color,
    StockRecord.size,
    StockRecord.unit_price,
)


class StockRepository:
    """Acceso a datos de la tabla `shoes`. Cada escritura se confirma sola."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, record_id: int) -> Optional[StockRecord]:
        with storage_guard(self.db, "consultar stock"):
            return self.db.query(StockRecord).filter(StockRecord.id == record_id).first()

    def find_by_merge_key(
        self,
        name: str,
        brand: str,
        article_number: Optional[str],
        color: str,
        size: float,
        unit_price: Decimal,
    ) -> Optional[StockRecord]:
        if article_number is None:
            article_filter = StockRecord.article_number.is_(None)
        else:
            article_filter = StockRecord.article_number == article_number

        with storage_guard(self.db, "buscar SKU"):
            return self.db.query(StockRecord).filter(
                and_(
                    StockRecord.name == name,
                    StockRecord.brand == brand,
                    article_filter,
                    StockRecord.color == color,
                    StockRecord.size == size,
                    StockRecord.unit_price == unit_price,
                )
            ).order_by(StockRecord.id).first()

    def find_by_sku_code(self, sku_code: str) -> Optional[StockRecord]:
        """Varios registros pueden compartir código: primero el más antiguo con stock"""
        without_stock = case((StockRecord.quantity_on_hand > 0, 0), else_=1)
        with storage_guard(self.db, "buscar código"):
            return self.db.query(StockRecord).filter(
                StockRecord.sku_code == sku_code
            ).order_by(without_stock, StockRecord.created_at, StockRecord.id).first()

    def insert(self, record: StockRecord) -> StockRecord:
        with storage_guard(self.db, "crear registro de stock"):
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        return record

    def save(self, record: StockRecord) -> StockRecord:
        with storage_guard(self.db, "actualizar registro de stock"):
            self.db.commit()
            self.db.refresh(record)
        return record

    def increment(self, record_id: int, quantity: int) -> bool:
        with storage_guard(self.db, "incrementar stock"):
            updated = self.db.query(StockRecord).filter(
                StockRecord.id == record_id
            ).update(
                {StockRecord.quantity_on_hand: StockRecord.quantity_on_hand + quantity},
                synchronize_session=False,
            )
            self.db.commit()
        return updated == 1

    def decrement_if_available(self, record_id: int, quantity: int) -> bool:
        """UPDATE condicional: sólo descuenta si sigue habiendo stock suficiente"""
        with storage_guard(self.db, "descontar stock"):
            updated = self.db.query(StockRecord).filter(
                StockRecord.id == record_id,
                StockRecord.quantity_on_hand >= quantity,
            ).update(
                {StockRecord.quantity_on_hand: StockRecord.quantity_on_hand - quantity},
                synchronize_session=False,
            )
            self.db.commit()
        return updated == 1

    def grouped_stock(self) -> List[dict]:
        """Stock agrupado por clave de fusión; suma registros duplicados"""
        latest = func.max(StockRecord.created_at)
        latest_id = func.max(StockRecord.id)

        with storage_guard(self.db, "agrupar stock"):
            rows = self.db.query(
                *MERGE_KEY,
                func.sum(StockRecord.quantity_on_hand).label("quantity_on_hand"),
                latest.label("created_at"),
                latest_id.label("id"),
                func.max(StockRecord.sku_code).label("sku_code"),
            ).group_by(*MERGE_KEY).order_by(latest.desc(), latest_id.desc()).all()

        return [dict(row._mapping) for row in rows]
