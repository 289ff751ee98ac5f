# shoepos/api/deps.py
from fastapi import Depends
from sqlalchemy.orm import Session

from shoepos.core.database import get_db
from shoepos.services.inventory import StockLedger
from shoepos.services.reports import ReportService
from shoepos.services.sales import SaleHistoryEditor, SalesService


def get_stock_ledger(db: Session = Depends(get_db)) -> StockLedger:
    return StockLedger(db)


def get_sales_service(db: Session = Depends(get_db)) -> SalesService:
    return SalesService(db)


def get_history_editor(db: Session = Depends(get_db)) -> SaleHistoryEditor:
    return SaleHistoryEditor(db)


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    return ReportService(db)
