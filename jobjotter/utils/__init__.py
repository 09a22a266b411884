"""Small helpers shared by the data access services."""

from .sql import sql_for_partial_update

__all__ = ["sql_for_partial_update"]
