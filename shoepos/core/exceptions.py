# shoepos/core/exceptions.py
"""
Errores del núcleo de inventario y ventas.

Cada error lleva un `kind` estable (lo que ve el cliente en el JSON) y un
mensaje legible. Los handlers de FastAPI en `shoepos.main` los traducen a
respuestas `{"error": kind, "message": ...}`.
"""
from typing import Union


class POSError(Exception):
    """Base de todos los errores del núcleo."""

    kind = "pos_error"
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class ValidationError(POSError):
    """Datos faltantes o mal formados (carrito vacío, id inválido, ...)."""

    kind = "validation_error"
    status_code = 400


class NotFoundError(POSError):
    """SKU, venta o índice de item desconocido."""

    kind = "not_found"
    status_code = 404


class ConflictError(POSError):
    """Stock insuficiente para la cantidad pedida."""

    kind = "conflict"
    status_code = 409

    def __init__(self, message: str, sku_code: str = None):
        self.sku_code = sku_code
        super().__init__(message)


class StorageError(POSError):
    """La base de datos no responde o la operación falló."""

    kind = "storage_error"
    status_code = 503


# Máximo de una columna INTEGER de 64 bits (SQLite / BIGINT)
MAX_RECORD_ID = 2 ** 63 - 1


def parse_record_id(raw: Union[int, str], label: str = "registro") -> int:
    """Validar un id antes de consultarlo en la BD"""
    if isinstance(raw, bool):
        raise ValidationError(f"ID de {label} inválido")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        # isdigit() acepta dígitos unicode ("²") que int() no convierte
        if not (text.isascii() and text.isdigit()):
            raise ValidationError(f"ID de {label} inválido: {raw}")
        value = int(text)
    if value <= 0 or value > MAX_RECORD_ID:
        raise ValidationError(f"ID de {label} inválido: {raw}")
    return value
