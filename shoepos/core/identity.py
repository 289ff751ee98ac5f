# shoepos/core/identity.py
"""
Códigos de identidad de los zapatos.

- Huella del SKU: "{marca}-{artículo|NA}-{talla}". Es el `sku_code` que se
  guarda en cada registro de stock y el prefijo de todas las etiquetas.
- Código trazable: huella + "-{timestamp_lote}-{secuencia}", uno por par
  físico recibido. No se guarda; sólo se imprime en la etiqueta.

La unicidad de los códigos trazables no es criptográfica: la secuencia los
separa dentro de un lote y el timestamp en milisegundos entre lotes.
"""
import time
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

Size = Union[int, float, Decimal, str]

NO_ARTICLE = "NA"


def format_size(size: Size) -> str:
    """Talla como texto: 9 -> "9", 9.0 -> "9", 9.5 -> "9.5" """
    try:
        value = Decimal(str(size))
    except InvalidOperation:
        return str(size).strip()
    if not value.is_finite():
        return str(size).strip()
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")


def sku_fingerprint(brand: str, article_number: Optional[str], size: Size) -> str:
    return f"{brand}-{article_number or NO_ARTICLE}-{format_size(size)}"


def traceable_code(
    brand: str,
    article_number: Optional[str],
    size: Size,
    batch_timestamp: int,
    sequence_index: int,
) -> str:
    fingerprint = sku_fingerprint(brand, article_number, size)
    return f"{fingerprint}-{batch_timestamp}-{sequence_index}"


def batch_timestamp() -> int:
    """Timestamp del lote en milisegundos (se toma una vez por reposición)"""
    return int(time.time() * 1000)


def strip_unit_suffix(code: str) -> Optional[str]:
    """
    Quitar "-{timestamp}-{secuencia}" de un código escaneado.

    Devuelve la huella si el código tiene forma de código trazable
    (al menos marca-artículo-talla-timestamp-secuencia con los dos últimos
    segmentos numéricos); si no, None.
    """
    if not code:
        return None
    parts = code.strip().split("-")
    if len(parts) < 5:
        return None
    timestamp, sequence = parts[-2], parts[-1]
    if not (timestamp.isdigit() and sequence.isdigit()):
        return None
    return "-".join(parts[:-2])
