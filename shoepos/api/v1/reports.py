# shoepos/api/v1/reports.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from shoepos.api.deps import get_report_service
from shoepos.schemas.report import SalesSummary, StockSummary
from shoepos.services.reports import ReportService

router = APIRouter()


@router.get("/sales-summary", response_model=SalesSummary)
async def sales_summary(
    date_from: Optional[datetime] = Query(None, alias="from"),
    date_to: Optional[datetime] = Query(None, alias="to"),
    reports: ReportService = Depends(get_report_service)
):
    return SalesSummary.model_validate(reports.sales_summary(date_from, date_to))


@router.get("/stock-summary", response_model=StockSummary)
async def stock_summary(reports: ReportService = Depends(get_report_service)):
    return StockSummary.model_validate(reports.stock_summary())
