"""Request record model: one document from the record source."""

import math
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

PLACEHOLDER = "N/A"

# Field names written by older submission forms
LEGACY_FIELD_NAMES = {
    "name": "customerName",
    "email": "userEmail",
    "message": "description",
    "timestamp": "submittedAt",
}

_PRIMITIVES = (str, int, float, bool)


def _text_or_none(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a stored point-in-time value; None when absent or unparseable.

    Accepts datetimes, ISO-8601 strings, epoch seconds and
    {"seconds": .., "nanoseconds": ..} maps as exported by document stores.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            parsed = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        if isinstance(seconds, (int, float)) and isinstance(nanos, (int, float)):
            return parse_timestamp(seconds + nanos / 1_000_000_000)
    return None


class RequestRecord(BaseModel):
    """A user request as fetched from the record source. Never mutated after fetch."""

    id: str
    customer_name: Optional[str] = Field(
        None,
        alias="customerName",
        validation_alias=AliasChoices("customerName", "customer_name", "name"),
    )
    user_email: Optional[str] = Field(
        None,
        alias="userEmail",
        validation_alias=AliasChoices("userEmail", "user_email", "email"),
    )
    phone_number: Optional[str] = Field(
        None,
        alias="phoneNumber",
        validation_alias=AliasChoices("phoneNumber", "phone_number"),
    )
    address: Optional[str] = None
    description: Optional[str] = Field(
        None,
        alias="description",
        validation_alias=AliasChoices("description", "message"),
    )
    courier: Optional[str] = None
    quantity: int = 0
    submitted_at: Optional[datetime] = Field(
        None,
        alias="submittedAt",
        validation_alias=AliasChoices("submittedAt", "submitted_at", "timestamp"),
    )
    product_links: list[str] = Field(
        default_factory=list,
        alias="productLinks",
        validation_alias=AliasChoices("productLinks", "product_links"),
    )
    status: Optional[str] = None

    model_config = {"populate_by_name": True, "extra": "allow", "frozen": True}

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator(
        "customer_name", "user_email", "phone_number", "address", "description", "courier", "status",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return _text_or_none(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, value: Any) -> int:
        if isinstance(value, bool) or value is None:
            return 0
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                return 0
        if isinstance(value, float):
            if not math.isfinite(value):
                return 0
            value = int(value)
        if isinstance(value, int):
            return max(value, 0)
        return 0

    @field_validator("submitted_at", mode="before")
    @classmethod
    def _coerce_submitted_at(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)

    @field_validator("product_links", mode="before")
    @classmethod
    def _coerce_links(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [value] if value.strip() else []
        if not isinstance(value, (list, tuple)):
            return []
        return [v for v in value if isinstance(v, str) and v.strip()]

    @classmethod
    def attribute_for(cls, field: str) -> Optional[str]:
        """Map a document field name (camelCase or legacy) to the model attribute, if any."""
        field = LEGACY_FIELD_NAMES.get(field, field)
        if field in cls.model_fields:
            return field
        for attr, info in cls.model_fields.items():
            if info.alias == field:
                return attr
        return None

    def get(self, field: str) -> Any:
        """Raw value of a document field or extra field; None when absent."""
        attr = self.attribute_for(field)
        if attr is not None:
            return getattr(self, attr)
        return (self.model_extra or {}).get(field)

    def display(self, field: str) -> str:
        """Field value as display text; "N/A" when absent, empty or non-primitive."""
        value = self.get(field)
        if value is None or not isinstance(value, _PRIMITIVES):
            return PLACEHOLDER
        text = str(value)
        return text if text.strip() else PLACEHOLDER

    def to_document(self) -> dict[str, Any]:
        """Serialize back to the camelCase document shape (absent fields omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
