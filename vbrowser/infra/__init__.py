"""Infrastructure modules for Virtual Browser."""

from . import config_store

__all__ = ["config_store"]
