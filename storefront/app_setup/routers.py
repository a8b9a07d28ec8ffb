"""
Registre central des routers (API v1, health).
- API v1: auth, category, product, product/braintree (paiement)
- Health: health_router
"""
from fastapi import FastAPI
from storefront.auth.views import api_router as auth_api_router
from storefront.categories.views import router as categories_router
from storefront.products.views import router as products_router
from storefront.payments import views as payments_views
from storefront.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    """
    Agrège tous les routers de l'application.
    - L'ordre n'a pas d'impact sauf conflits de chemins (évités par préfixes).
    """
    # API v1
    app.include_router(auth_api_router)
    app.include_router(categories_router)
    app.include_router(payments_views.router)
    app.include_router(products_router)
    # Health & monitoring
    app.include_router(health_router)
