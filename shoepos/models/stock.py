# shoepos/models/stock.py
from sqlalchemy import Column, Integer, String, Float, Numeric, DateTime, Index, CheckConstraint

from shoepos.core.database import Base
from shoepos.core.utils import utcnow


class StockRecord(Base):
    __tablename__ = "shoes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    brand = Column(String(80), nullable=False)
    article_number = Column(String(80), nullable=True)
    color = Column(String(50), nullable=False)
    size = Column(Float, nullable=False)
    quantity_on_hand = Column(Integer, nullable=False, default=0)
    unit_price = Column(Numeric(10, 2), nullable=False)
    sku_code = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Sin UniqueConstraint sobre la clave de fusión: article_number puede ser NULL
    # y los duplicados se suman en el stock agrupado.
    __table_args__ = (
        Index(
            "ix_shoes_merge_key",
            "name", "brand", "article_number", "color", "size", "unit_price",
        ),
        CheckConstraint("quantity_on_hand >= 0", name="ck_shoes_quantity_non_negative"),
    )

    def __repr__(self):
        return f"<StockRecord {self.id} {self.sku_code} x{self.quantity_on_hand}>"
