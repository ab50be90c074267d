"""
Gestão de OS - Schemas comuns
"""
from datetime import datetime, timezone
from typing import Optional


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Datas são gravadas em UTC sem timezone (mesmo padrão de datetime.utcnow)"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def blank_to_none(value):
    """Campos de formulário vazios chegam como "" e devem virar null"""
    if isinstance(value, str) and not value.strip():
        return None
    return value
