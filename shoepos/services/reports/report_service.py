# shoepos/services/reports/report_service.py
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

from sqlalchemy.orm import Session

from shoepos.services.inventory import StockLedger
from shoepos.services.sales import SaleHistoryEditor


class ReportService:

    def __init__(self, db: Session):
        self.db = db
        self.ledger = StockLedger(db)
        self.history = SaleHistoryEditor(db)

    def sales_summary(
        self,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Dict:
        """Totales de ventas en un rango cerrado de fechas"""
        result = self.history.list_sales(date_from, date_to)

        items_sold = 0
        total_profit = Decimal("0")
        total_discount = Decimal("0")
        for sale in result["sales"]:
            for item in sale.items:
                items_sold += item.quantity
                total_profit += Decimal(item.profit)
                total_discount += Decimal(item.discount)

        return {
            "date_from": date_from,
            "date_to": date_to,
            "sales_count": result["count"],
            "items_sold": items_sold,
            "total_amount": result["total_amount"],
            "total_profit": total_profit,
            "total_discount": total_discount,
        }

    def stock_summary(self) -> Dict:
        """Pares en stock y valor a precio de costo"""
        groups = self.ledger.current_stock()
        return {
            "sku_count": len(groups),
            "total_pairs": sum(int(group["quantity_on_hand"] or 0) for group in groups),
            "stock_value": sum(
                (Decimal(group["unit_price"]) * (group["quantity_on_hand"] or 0) for group in groups),
                Decimal("0"),
            ),
        }
