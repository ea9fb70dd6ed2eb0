"""Virtual Browser modular package."""

from . import browser, constants, errors, infra, paths

__all__ = [
    "browser",
    "constants",
    "errors",
    "infra",
    "paths",
]
