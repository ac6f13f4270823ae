"""Processor registry, keyed by processor name."""

from .base import LineProcessor, Processor
from .bookmark import BookmarkListProcessor
from .diff import DiffProcessor, ShowProcessor
from .log import LogProcessor
from .op_log import OpLogProcessor
from .status import StatusProcessor

__all__ = ["LineProcessor", "Processor", "discover_processors", "get_processor"]

_PROCESSOR_CLASSES = (
    StatusProcessor,
    LogProcessor,
    OpLogProcessor,
    BookmarkListProcessor,
    DiffProcessor,
    ShowProcessor,
)


def discover_processors() -> dict[str, Processor]:
    """Instantiate every processor, keyed by its name."""
    processors = [cls() for cls in _PROCESSOR_CLASSES]
    return {p.name: p for p in processors}


def get_processor(name: str) -> Processor | None:
    return discover_processors().get(name)
