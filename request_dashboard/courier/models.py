"""Order submission payload accepted by the courier proxy."""

from typing import Any, Optional

from pydantic import BaseModel


class OrderRequest(BaseModel):
    """Fields forwarded to the courier as-is. Only `courier` is interpreted by the proxy."""

    invoice: Any = None
    recipient_name: Any = None
    recipient_phone: Any = None
    recipient_address: Any = None
    cod_amount: Any = None
    note: Any = None
    courier: Optional[str] = None

    model_config = {"extra": "ignore"}
