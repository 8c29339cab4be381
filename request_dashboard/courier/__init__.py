"""Courier order submission proxy."""

from request_dashboard.courier.clients import (
    CourierClient,
    PathaoClient,
    SteadfastClient,
    build_couriers,
)
from request_dashboard.courier.models import OrderRequest
from request_dashboard.courier.routes import router

__all__ = [
    "CourierClient",
    "SteadfastClient",
    "PathaoClient",
    "build_couriers",
    "OrderRequest",
    "router",
]
