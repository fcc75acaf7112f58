"""Protocol interfaces for the service manager."""
from .getter import AssociatedDeriver, GetMany, GetOne
from .transport import Transport

__all__ = ["AssociatedDeriver", "GetMany", "GetOne", "Transport"]
