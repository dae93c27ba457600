# backoffice/api/__init__.py
from fastapi import FastAPI

from backoffice.api.routers import health, orders, products, users


def include_routers(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(orders.router)
    return app
