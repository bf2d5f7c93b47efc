from fastapi import APIRouter

from app.domains.customers.api.routes import router as customers_router

api_router = APIRouter()

# API routes (all have /api/v1 prefix from app_factory)
api_router.include_router(customers_router)
