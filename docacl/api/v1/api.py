"""API routes for the FastAPI application."""

from fastapi import APIRouter

from docacl.api.v1.endpoints import access_filter, health

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(access_filter.router, prefix="/access-filter", tags=["access-filter"])
