"""Per-file context for structured logging.

Carries the identifier and path of the file currently being processed in
contextvars, so every log record emitted while a file is processed can be
tagged with it.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_file_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_id", default=None
)
_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_path", default=None
)


def set_asset_context(file_id: str, file_path: Path | str | None = None) -> None:
    """Set the file currently being processed.

    Args:
        file_id: Sequential identifier (e.g., "F001").
        file_path: Path of the file, or None.
    """
    _file_id.set(file_id)
    _file_path.set(str(file_path) if file_path is not None else None)


def clear_asset_context() -> None:
    _file_id.set(None)
    _file_path.set(None)


@contextmanager
def asset_context(
    file_id: str, file_path: Path | str | None = None
) -> Generator[None, None, None]:
    """Tag log records with a file for the duration of the block.

    The previous context is restored on exit, so blocks may nest.

    Example:
        with asset_context("F001", "/videos/a.mp4"):
            logger.info("Probing")  # logged as "[F001] ..."
    """
    old_file_id = _file_id.get()
    old_file_path = _file_path.get()
    try:
        set_asset_context(file_id, file_path)
        yield
    finally:
        _file_id.set(old_file_id)
        _file_path.set(old_file_path)


def get_asset_context() -> tuple[str | None, str | None]:
    """Return (file_id, file_path); either may be None."""
    return _file_id.get(), _file_path.get()


class AssetContextFilter(logging.Filter):
    """Inject the current file context into log records.

    Adds ``file_id`` and ``file_path`` for JSON output and an ``asset_tag``
    such as ``"[F001] "`` for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        file_id, file_path = get_asset_context()

        record.file_id = file_id
        record.file_path = file_path
        record.asset_tag = f"[{file_id}] " if file_id else ""

        return True
