"""prosescope — markup-to-scoped-segment transducer for prose linters."""

__version__ = "0.1.0"

from prosescope.builder import SegmentBuilder, build_document  # noqa: E402
from prosescope.formats import load_document, parse_text  # noqa: E402
from prosescope.models import Document, Segment  # noqa: E402
from prosescope.scopes import DEFAULT_SCOPE_TABLE, ScopeTable  # noqa: E402
from prosescope.sink import CollectingSink, Sink, evaluate_document  # noqa: E402

__all__ = [
    "DEFAULT_SCOPE_TABLE",
    "CollectingSink",
    "Document",
    "ScopeTable",
    "Segment",
    "SegmentBuilder",
    "Sink",
    "__version__",
    "build_document",
    "evaluate_document",
    "load_document",
    "parse_text",
]
