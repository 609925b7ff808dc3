"""Entrada principal de la app FastAPI (middlewares, excepciones, GraphQL, REST y front-end)."""
import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.core.config import settings
from app.infrastructure.db.mongo import init_mongo, close_mongo, db_ready
from app.infrastructure.db.bootstrap import ensure_collections
from app.api.router import api_router
from app.api.graphql.schema import create_graphql_router
from app.core.logging import setup_logging
from app.core.middleware import add_middlewares
from app.core.exceptions import register_exception_handlers

_log = logging.getLogger("notegraph.startup")

setup_logging(settings.log_level)
app = FastAPI(title=settings.app_name)

add_middlewares(app)
register_exception_handlers(app)


@app.on_event("startup")
def on_startup():
    init_mongo()
    # Garantiza colecciones/índices/validadores mínimos si hay conexión
    if db_ready():
        ensure_collections()
    else:
        _log.warning("Mongo no listo; omitiendo ensure_collections()")


@app.on_event("shutdown")
def on_shutdown():
    close_mongo()


# REST bajo el prefijo configurado; GraphQL en su propia ruta
app.include_router(api_router, prefix=settings.api_prefix_normalized)
app.include_router(create_graphql_router(), prefix=settings.graphql_path)

# Front-end estático al final para no tapar las rutas anteriores
if settings.serve_static and Path(settings.static_dir).is_dir():
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
