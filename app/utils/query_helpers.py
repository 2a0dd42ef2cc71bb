from datetime import datetime, timezone
from typing import Optional, Dict, Any


def utc_now_iso() -> str:
    """Timestamp format written to timestamptz columns"""
    return datetime.now(timezone.utc).isoformat()


def first_embedded(row: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    """Pop a PostgREST embed from a row; one-to-one joins come back as a list or an object depending on the relationship"""
    embedded = row.pop(key, None)
    if isinstance(embedded, list):
        return embedded[0] if embedded else None
    return embedded or None
