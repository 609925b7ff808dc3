"""
Utilidades de fecha/hora compartidas por los repositorios.
"""
from datetime import datetime, timezone


def now_iso() -> str:
    """Instante actual en ISO-8601 UTC con precisión de segundos (`...Z`)."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
