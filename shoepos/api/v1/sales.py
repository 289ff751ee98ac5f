# shoepos/api/v1/sales.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from shoepos.api.deps import get_history_editor, get_sales_service
from shoepos.schemas.sale import (
    PatchItemResponse,
    ReplaceItemsRequest,
    SaleItemOut,
    SaleItemPatch,
    SaleListOut,
    SaleOut,
    SellRequest,
    SellResponse,
)
from shoepos.services.sales import SaleHistoryEditor, SalesService

router = APIRouter()


@router.post("/sell", response_model=SellResponse)
async def sell(request: SellRequest, service: SalesService = Depends(get_sales_service)):
    """Vender un carrito completo (todo o nada)"""
    sale_id = service.sell(request.cart)
    return SellResponse(message="Venta completada correctamente", sale_id=sale_id)


@router.get("", response_model=SaleListOut)
async def list_sales(
    date_from: Optional[datetime] = Query(None, alias="from"),
    date_to: Optional[datetime] = Query(None, alias="to"),
    editor: SaleHistoryEditor = Depends(get_history_editor)
):
    """Historial de ventas, opcionalmente en un rango de fechas"""
    return SaleListOut.model_validate(editor.list_sales(date_from, date_to))


@router.get("/{sale_id}", response_model=SaleOut)
async def get_sale(sale_id: str, editor: SaleHistoryEditor = Depends(get_history_editor)):
    return SaleOut.model_validate(editor.get_sale(sale_id))


@router.put("/{sale_id}/items", response_model=SaleOut)
async def replace_sale_items(
    sale_id: str,
    request: ReplaceItemsRequest,
    editor: SaleHistoryEditor = Depends(get_history_editor)
):
    """Reemplazar todos los items de una venta"""
    return SaleOut.model_validate(editor.replace_items(sale_id, request.items))


@router.patch("/{sale_id}/items/{item_index}", response_model=PatchItemResponse)
async def patch_sale_item(
    sale_id: str,
    item_index: str,
    patch: SaleItemPatch,
    editor: SaleHistoryEditor = Depends(get_history_editor)
):
    """Corregir un item de la venta"""
    item = editor.patch_item(sale_id, item_index, patch)
    return PatchItemResponse(
        message="Item de la venta actualizado correctamente",
        updated_item=SaleItemOut.model_validate(item),
    )
