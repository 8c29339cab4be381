"""Order submission proxy: POST /api/submitorder forwards to the selected courier."""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from request_dashboard.config import DEFAULT_COURIER
from request_dashboard.courier.clients import CourierClient
from request_dashboard.courier.models import OrderRequest
from request_dashboard.errors import CourierError, UnknownCourierError
from request_dashboard.utils.logger import get_logger

logger = get_logger("request_dashboard.courier.routes")

router = APIRouter(prefix="/api", tags=["courier"])

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def select_courier(couriers: dict[str, CourierClient], name: str | None) -> CourierClient:
    key = (name or DEFAULT_COURIER).strip().lower()
    client = couriers.get(key)
    if client is None:
        raise UnknownCourierError(name or "")
    return client


@router.api_route("/submitorder", methods=_ALL_METHODS, response_model=None)
async def submit_order(request: Request) -> JSONResponse:
    """Forward an order to the courier named by `courier` (default from config)."""
    if request.method != "POST":
        return JSONResponse(
            status_code=405,
            content={"message": "Method Not Allowed"},
            headers={"Allow": "POST"},
        )
    try:
        body: Any = await request.json()
        order = OrderRequest.model_validate(body if isinstance(body, dict) else {})
    except (ValueError, ValidationError) as e:
        logger.warning("courier.submit.bad_body", error=str(e))
        return JSONResponse(status_code=400, content={"message": "Invalid JSON body"})

    couriers: dict[str, CourierClient] = getattr(request.app.state, "couriers", {})
    try:
        client = select_courier(couriers, order.courier)
    except UnknownCourierError as e:
        logger.warning("courier.submit.unknown_courier", courier=e.courier)
        return JSONResponse(status_code=400, content={"message": str(e)})

    try:
        data = await client.submit(order)
    except CourierError as e:
        return JSONResponse(
            status_code=500,
            content={"message": "Failed to place order", "error": str(e), "data": e.data},
        )
    except Exception as e:
        logger.exception("courier.submit.error", courier=client.name, error=str(e))
        return JSONResponse(
            status_code=500,
            content={"message": "Something went wrong", "error": str(e)},
        )
    return JSONResponse(status_code=200, content={"message": "Order submitted successfully", "data": data})
