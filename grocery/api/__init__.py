# grocery/api/__init__.py
from fastapi import FastAPI

from grocery.api.routers import (
    health,
    users,
    products,
    carts,
    addresses,
    orders,
    checkout,
    discounts,
    payments,
)


def include_routers(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(addresses.router)
    app.include_router(orders.router)
    app.include_router(checkout.router)
    app.include_router(discounts.router)
    app.include_router(payments.router)
    return app
