"""
Superficie de errores GraphQL.

Los errores de dominio (NotFound, Conflict, InvalidArgument) llegan al cliente
con su mensaje tal cual en `errors`; cualquier otra falla (p. ej. Mongo caído)
se loggea y se reemplaza por un mensaje genérico `Failed to <acción>`.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from app.core.exceptions import DomainError, InternalError

_log = logging.getLogger("notegraph.graphql")


@contextmanager
def surface_errors(action: str) -> Iterator[None]:
    try:
        yield
    except DomainError:
        raise
    except Exception as e:
        _log.exception("GraphQL operation failed: %s", action)
        raise InternalError(f"Failed to {action}") from e
