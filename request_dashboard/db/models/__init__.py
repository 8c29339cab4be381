"""Re-export all ORM models so Base.metadata has all tables."""

from request_dashboard.db.models.request import RequestStatusRow, UserRequestRow

__all__ = [
    "UserRequestRow",
    "RequestStatusRow",
]
