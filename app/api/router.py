"""Agregador de routers REST de la API (GraphQL se monta aparte en main)."""
from fastapi import APIRouter
from app.api.routers import health

api_router = APIRouter()
api_router.include_router(health.router)
