from fastapi import APIRouter

from .routes import analytics, catalog, inventory, orders, partners, preview, schemes

api_router = APIRouter()
api_router.include_router(catalog.router)
api_router.include_router(partners.router)
api_router.include_router(schemes.router)
api_router.include_router(inventory.router)
api_router.include_router(orders.router)
api_router.include_router(preview.router)
api_router.include_router(analytics.router)
