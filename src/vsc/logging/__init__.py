"""Structured logging for vsc.

Text or JSON output, optional rotating log file, and per-file context tags.
"""

from vsc.logging.config import configure_logging
from vsc.logging.context import (
    AssetContextFilter,
    asset_context,
    clear_asset_context,
    get_asset_context,
    set_asset_context,
)
from vsc.logging.handlers import JSONFormatter

__all__ = [
    "AssetContextFilter",
    "JSONFormatter",
    "asset_context",
    "clear_asset_context",
    "configure_logging",
    "get_asset_context",
    "set_asset_context",
]
