# shoepos/api/v1/stock.py
from typing import List

from fastapi import APIRouter, Depends, status

from shoepos.api.deps import get_stock_ledger
from shoepos.core.exceptions import NotFoundError
from shoepos.schemas.stock import (
    RestockRequest,
    RestockResult,
    StockGroupOut,
    StockRecordOut,
    StockRecordUpdate,
)
from shoepos.services.inventory import StockLedger

router = APIRouter()


@router.post("/restock", response_model=RestockResult, status_code=status.HTTP_201_CREATED)
async def restock(
    request: RestockRequest,
    ledger: StockLedger = Depends(get_stock_ledger)
):
    """Agregar zapatos: fusiona por SKU y genera un código por par"""
    return RestockResult.model_validate(ledger.restock(request))


@router.get("", response_model=List[StockGroupOut])
async def current_stock(ledger: StockLedger = Depends(get_stock_ledger)):
    """Stock agrupado, lo más reciente primero"""
    return [StockGroupOut.model_validate(row) for row in ledger.current_stock()]


@router.get("/sku/{code}", response_model=StockRecordOut)
async def find_by_sku_code(code: str, ledger: StockLedger = Depends(get_stock_ledger)):
    """Coincidencia exacta por código de SKU"""
    record = ledger.find_by_sku_code(code)
    if record is None:
        raise NotFoundError(f"Producto no encontrado para el código: {code}")
    return StockRecordOut.model_validate(record)


@router.get("/barcode/{code}", response_model=StockRecordOut)
async def scan_barcode(code: str, ledger: StockLedger = Depends(get_stock_ledger)):
    """Buscar por etiqueta escaneada (acepta códigos por par)"""
    return StockRecordOut.model_validate(ledger.resolve_scanned_code(code))


@router.get("/{record_id}", response_model=StockRecordOut)
async def get_stock_record(record_id: str, ledger: StockLedger = Depends(get_stock_ledger)):
    return StockRecordOut.model_validate(ledger.get(record_id))


@router.patch("/{record_id}", response_model=StockRecordOut)
async def update_stock_record(
    record_id: str,
    patch: StockRecordUpdate,
    ledger: StockLedger = Depends(get_stock_ledger)
):
    """Corrección manual de un registro de stock"""
    return StockRecordOut.model_validate(ledger.update(record_id, patch))
