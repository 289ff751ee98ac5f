# shoepos/models/sale.py
from sqlalchemy import Column, Integer, String, Float, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from shoepos.core.database import Base
from shoepos.core.utils import utcnow


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    sold_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    # Relationships
    items = relationship(
        "SaleItem",
        back_populates="sale",
        order_by="SaleItem.position",
        cascade="all, delete-orphan",
    )


class SaleItem(Base):
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)

    sku_code = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    sell_price = Column(Numeric(12, 2), nullable=False)
    discount = Column(Numeric(12, 2), nullable=False, default=0)
    profit = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False)

    # Foto de los datos del zapato al momento de la venta
    name = Column(String(150))
    brand = Column(String(80))
    article_number = Column(String(80))
    size = Column(Float)
    color = Column(String(50))

    # Relationships
    sale = relationship("Sale", back_populates="items")

    @property
    def shoe_info(self) -> dict:
        return {
            "name": self.name,
            "brand": self.brand,
            "article_number": self.article_number,
            "size": self.size,
            "color": self.color,
        }
