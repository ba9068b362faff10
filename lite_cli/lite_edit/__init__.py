"""Public exports for the lite-edit package."""

from .editor import CellEditor
from .log import EditLog
from .translator import build_update

__all__ = [
    "CellEditor",
    "EditLog",
    "build_update",
]
