"""Submit-order command: send one order through a courier client."""

import asyncio
import json
from typing import Any

import typer

from request_dashboard.config import DEFAULT_COURIER
from request_dashboard.courier import OrderRequest, build_couriers
from request_dashboard.courier.routes import select_courier
from request_dashboard.errors import CourierError, UnknownCourierError

from .shared import console, logger, open_http_client


async def _submit(order: OrderRequest) -> Any:
    async with open_http_client() as http:
        client = select_courier(build_couriers(http), order.courier)
        return await client.submit(order)


def submit_order(
    invoice: str = typer.Option(..., "--invoice", help="Invoice number"),
    name: str = typer.Option(..., "--name", help="Recipient name"),
    phone: str = typer.Option(..., "--phone", help="Recipient phone"),
    address: str = typer.Option(..., "--address", help="Recipient address"),
    cod_amount: float = typer.Option(0, "--cod", help="Cash-on-delivery amount"),
    note: str = typer.Option("", "--note", help="Delivery note"),
    courier: str = typer.Option(DEFAULT_COURIER, "--courier", "-c", help="steadfast or pathao"),
) -> None:
    """Create a courier order directly (same forwarding as POST /api/submitorder)."""
    order = OrderRequest(
        invoice=invoice,
        recipient_name=name,
        recipient_phone=phone,
        recipient_address=address,
        cod_amount=cod_amount,
        note=note,
        courier=courier,
    )
    log = logger.bind(command="submit-order", courier=courier, invoice=invoice)
    try:
        data = asyncio.run(_submit(order))
    except UnknownCourierError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2) from e
    except CourierError as e:
        console.print(f"[red]Failed to place order: {e}[/red]")
        console.print_json(json.dumps(e.data, default=str))
        log.error("submit_order.rejected", status_code=e.status_code)
        raise typer.Exit(1) from e
    console.print("[green]Order submitted successfully[/green]")
    console.print_json(json.dumps(data, default=str))
    log.info("submit_order.ok")
