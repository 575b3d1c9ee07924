"""Selection engine: update channel and selection models."""

from .channel import UpdateChannel
from .model import (
    SelectionOutcome,
    Confirmed,
    Cancelled,
    SelectionModel,
    SingleSelectModel,
    MultiSelectModel,
)

__all__ = [
    "UpdateChannel",
    "SelectionOutcome",
    "Confirmed",
    "Cancelled",
    "SelectionModel",
    "SingleSelectModel",
    "MultiSelectModel",
]
