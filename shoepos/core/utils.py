# shoepos/core/utils.py
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Hora actual en UTC sin tzinfo (como se guarda en BD)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalizar fechas recibidas a UTC naive para comparar con la BD"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
