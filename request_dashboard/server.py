"""FastAPI server: request table view, per-record actions and the courier proxy."""

from contextlib import asynccontextmanager
from typing import Any, Literal, Optional

import httpx
from fastapi import BackgroundTasks, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from request_dashboard import __version__
from request_dashboard.config import COURIER_TIMEOUT_SECONDS, INVOICE_STATUS_LABEL, RECORD_SOURCE
from request_dashboard.courier import build_couriers
from request_dashboard.courier import router as courier_router
from request_dashboard.courier.clients import CourierClient
from request_dashboard.errors import RecordNotFoundError, RecordSourceError
from request_dashboard.invoice import build_invoice, render_invoice_html
from request_dashboard.models.record import RequestRecord
from request_dashboard.models.view import ViewConfig
from request_dashboard.sources import RecordSource, build_source
from request_dashboard.status_store import StatusStore
from request_dashboard.utils.logger import get_logger, record_context
from request_dashboard.view.aggregates import compute_aggregates
from request_dashboard.view.engine import LOAD_ERROR_PREFIX, load_view
from request_dashboard.view.projector import build_message_link
from request_dashboard.view.sort_engine import resolve_sort, use_collation_locale

logger = get_logger("request_dashboard.server")


class StatusBody(BaseModel):
    status: str


def _new_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(COURIER_TIMEOUT_SECONDS),
        limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
    )


async def _fetch_records(app: FastAPI) -> list[RequestRecord]:
    source: RecordSource = app.state.source
    try:
        return await source.fetch_all()
    except RecordSourceError as e:
        logger.error("requests.fetch_error", error=str(e))
        raise HTTPException(status_code=503, detail=f"{LOAD_ERROR_PREFIX}: {e}") from e


async def _get_record(app: FastAPI, record_id: str) -> RequestRecord:
    for record in await _fetch_records(app):
        if record.id == record_id:
            return record
    raise HTTPException(status_code=404, detail=str(RecordNotFoundError(record_id)))


async def _set_status(
    app: FastAPI,
    background_tasks: BackgroundTasks,
    record_id: str,
    label: str,
) -> None:
    """Merge the label into the status map now; persist after the response is sent."""
    store: StatusStore = app.state.status_store
    await store.set(record_id, label)
    background_tasks.add_task(store.persist, app.state.source, record_id, label)
    logger.info("requests.status_set", record_id=record_id, status=label)


@asynccontextmanager
async def _lifespan(app: FastAPI, create_resources: bool = True):
    """Create the shared HTTP client, record source and couriers in the server's event loop."""
    if create_resources:
        http_client = _new_http_client()
        app.state._http_client = http_client
        app.state.source = build_source(RECORD_SOURCE, http_client)
        app.state.couriers = build_couriers(http_client)
        app.state.status_store = StatusStore()
        loaded = await app.state.status_store.load(app.state.source)
        logger.info("server.lifespan.started", record_source=RECORD_SOURCE, statuses=loaded)

    yield

    http_client = getattr(app.state, "_http_client", None)
    if http_client is not None:
        try:
            await http_client.aclose()
        except Exception as e:
            logger.debug("server.lifespan.http_client_close_error", error=str(e))
        app.state._http_client = None


def create_app(
    source: Optional[RecordSource] = None,
    couriers: Optional[dict[str, CourierClient]] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    statuses: Optional[dict[str, str]] = None,
) -> FastAPI:
    """
    Create the FastAPI app. If source is passed, use it (and the given couriers or HTTP client)
    and create nothing in the lifespan; otherwise the lifespan builds everything from config.
    """
    use_collation_locale()
    create_in_lifespan = source is None
    app = FastAPI(
        title="Request Dashboard",
        version=__version__,
        lifespan=lambda app: _lifespan(app, create_resources=create_in_lifespan),
    )
    if source is not None:
        app.state.source = source
        app.state.status_store = StatusStore(statuses)
        if couriers is None:
            if http_client is None:
                http_client = _new_http_client()
                app.state._http_client = http_client
            couriers = build_couriers(http_client)
        app.state.couriers = couriers

    app.include_router(courier_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/requests", response_model=None)
    async def list_requests(
        request: Request,
        q: str = Query("", description="Case-insensitive substring search"),
        sort: Optional[str] = Query(
            None, description="Field to sort by; omitted means newest first, empty keeps source order"
        ),
        direction: Optional[Literal["asc", "desc"]] = Query(None),
        mode: Literal["minimal", "full"] = Query("minimal"),
    ) -> JSONResponse | dict[str, Any]:
        """Filtered, sorted and projected table plus stats over the whole batch."""
        order = resolve_sort(sort, direction)
        config = ViewConfig(display_mode=mode, sort_key=order.key, sort_direction=order.direction, search_query=q)
        state = await load_view(request.app.state.source, config, request.app.state.status_store.snapshot())
        if state.status == "error":
            return JSONResponse(status_code=503, content={"status": "error", "error": state.error})
        return {"status": "ready", "view": state.view.model_dump(mode="json")}

    @app.get("/requests/stats")
    async def request_stats(request: Request) -> dict[str, Any]:
        records = await _fetch_records(request.app)
        return compute_aggregates(records).model_dump()

    @app.get("/requests/statuses")
    async def request_statuses(request: Request) -> dict[str, dict[str, str]]:
        return {"statuses": request.app.state.status_store.snapshot()}

    @app.put("/requests/{record_id}/status")
    async def update_status(
        record_id: str,
        body: StatusBody,
        request: Request,
        background_tasks: BackgroundTasks,
    ) -> dict[str, str]:
        label = body.status.strip()
        if not label:
            raise HTTPException(status_code=400, detail="status is required and must be non-empty")
        with record_context(record_id, route="status"):
            await _get_record(request.app, record_id)
            await _set_status(request.app, background_tasks, record_id, label)
        return {"id": record_id, "status": label}

    @app.post("/requests/{record_id}/invoice")
    async def create_invoice(
        record_id: str,
        request: Request,
        background_tasks: BackgroundTasks,
    ) -> dict[str, Any]:
        """Build the invoice document and mark the request as invoiced."""
        with record_context(record_id, route="invoice"):
            record = await _get_record(request.app, record_id)
            await _set_status(request.app, background_tasks, record_id, INVOICE_STATUS_LABEL)
        return build_invoice(record, status=INVOICE_STATUS_LABEL).model_dump(mode="json")

    @app.get("/requests/{record_id}/invoice.html", response_class=HTMLResponse)
    async def invoice_page(record_id: str, request: Request) -> HTMLResponse:
        record = await _get_record(request.app, record_id)
        status = request.app.state.status_store.get(record_id)
        return HTMLResponse(render_invoice_html(build_invoice(record, status=status)))

    @app.get("/requests/{record_id}/message-link")
    async def message_link(record_id: str, request: Request) -> dict[str, str]:
        record = await _get_record(request.app, record_id)
        link = build_message_link(record)
        return {"label": link.label, "href": link.href}

    return app
