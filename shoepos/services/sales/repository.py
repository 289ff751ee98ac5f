# shoepos/services/sales/repository.py
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, selectinload

from shoepos.core.database import storage_guard
from shoepos.core.utils import utcnow
from shoepos.models.sale import Sale, SaleItem


def build_items(items: List[Dict]) -> List[SaleItem]:
    return [SaleItem(position=position, **data) for position, data in enumerate(items)]


class SaleRepository:

    def __init__(self, db: Session):
        self.db = db

    def create(self, items: List[Dict], sold_at: Optional[datetime] = None) -> Sale:
        """Una venta con todos sus items en un solo INSERT confirmado"""
        sale = Sale(sold_at=sold_at or utcnow(), items=build_items(items))
        with storage_guard(self.db, "registrar la venta"):
            self.db.add(sale)
            self.db.commit()
            self.db.refresh(sale)
        return sale

    def get(self, sale_id: int) -> Optional[Sale]:
        with storage_guard(self.db, "consultar la venta"):
            return self.db.query(Sale).options(
                selectinload(Sale.items)
            ).filter(Sale.id == sale_id).first()

    def list(
        self,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> List[Sale]:
        query = self.db.query(Sale).options(selectinload(Sale.items))
        if date_from is not None:
            query = query.filter(Sale.sold_at >= date_from)
        if date_to is not None:
            query = query.filter(Sale.sold_at <= date_to)

        with storage_guard(self.db, "listar ventas"):
            return query.order_by(Sale.sold_at.desc(), Sale.id.desc()).all()

    def replace_items(self, sale: Sale, items: List[Dict]) -> Sale:
        with storage_guard(self.db, "reemplazar items de la venta"):
            sale.items = build_items(items)
            self.db.commit()
            self.db.refresh(sale)
        return sale

    def save_item(self, item: SaleItem) -> SaleItem:
        with storage_guard(self.db, "actualizar item de la venta"):
            self.db.commit()
            self.db.refresh(item)
        return item
