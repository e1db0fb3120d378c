"""Services — multi-table operations over the repositories."""

from lampreas.services.client_service import ClientService

__all__ = ["ClientService"]
