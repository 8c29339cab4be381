"""Courier REST clients: Steadfast (packzy) and Pathao."""

from typing import Any, Protocol

import httpx

from request_dashboard.config import (
    PATHAO_ACCESS_TOKEN,
    PATHAO_BASE_URL,
    PATHAO_STORE_ID,
    STEADFAST_API_KEY,
    STEADFAST_BASE_URL,
    STEADFAST_SECRET_KEY,
)
from request_dashboard.courier.models import OrderRequest
from request_dashboard.errors import CourierError
from request_dashboard.utils.logger import get_logger

logger = get_logger("request_dashboard.courier.clients")


class CourierClient(Protocol):
    name: str

    async def submit(self, order: OrderRequest) -> Any:
        """Create the order upstream and return the courier's response body."""
        ...


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


async def _post(http: httpx.AsyncClient, courier: str, url: str, headers: dict[str, str], payload: dict) -> Any:
    logger.info(
        "courier.submit.request",
        courier=courier,
        url=url,
        invoice=payload.get("invoice", payload.get("merchant_order_id")),
        recipient_phone=payload.get("recipient_phone"),
    )
    response = await http.post(url, headers=headers, json=payload)
    data = _response_body(response)
    if response.is_error:
        logger.warning("courier.submit.rejected", courier=courier, status_code=response.status_code)
        raise CourierError(
            f"{courier} responded with HTTP {response.status_code}",
            status_code=response.status_code,
            data=data,
        )
    logger.info("courier.submit.ok", courier=courier, status_code=response.status_code)
    return data


class SteadfastClient:
    """POST {base}/create_order with Api-Key / Secret-Key headers."""

    name = "steadfast"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = STEADFAST_BASE_URL,
        api_key: str = STEADFAST_API_KEY,
        secret_key: str = STEADFAST_SECRET_KEY,
    ):
        self._http = http_client
        self._url = f"{base_url.rstrip('/')}/create_order"
        self._api_key = api_key
        self._secret_key = secret_key

    async def submit(self, order: OrderRequest) -> Any:
        headers = {
            "Api-Key": self._api_key,
            "Secret-Key": self._secret_key,
            "Content-Type": "application/json",
        }
        payload = order.model_dump(exclude={"courier"}, exclude_unset=True)
        return await _post(self._http, self.name, self._url, headers, payload)


class PathaoClient:
    """POST {base}/aladdin/api/v1/orders with a bearer token; field names mapped to Pathao's."""

    name = "pathao"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = PATHAO_BASE_URL,
        access_token: str = PATHAO_ACCESS_TOKEN,
        store_id: str = PATHAO_STORE_ID,
    ):
        self._http = http_client
        self._url = f"{base_url.rstrip('/')}/aladdin/api/v1/orders"
        self._access_token = access_token
        self._store_id = store_id

    async def submit(self, order: OrderRequest) -> Any:
        headers = {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        payload = {
            "store_id": self._store_id,
            "merchant_order_id": order.invoice,
            "recipient_name": order.recipient_name,
            "recipient_phone": order.recipient_phone,
            "recipient_address": order.recipient_address,
            "amount_to_collect": order.cod_amount,
            "special_instruction": order.note,
        }
        return await _post(self._http, self.name, self._url, headers, payload)


def build_couriers(http_client: httpx.AsyncClient) -> dict[str, CourierClient]:
    """All recognized couriers, keyed by the `courier` discriminator value."""
    return {
        SteadfastClient.name: SteadfastClient(http_client),
        PathaoClient.name: PathaoClient(http_client),
    }
