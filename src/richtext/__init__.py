"""Rich-text values: text with per-character format stacks, built from markup.

The public operators mirror each other: each takes a bare :class:`Value` or a
:class:`Record` (value plus selection) and returns the same shape.
"""

from .core import Format, MultilineRecord, PathSelection, Record, Selection, Value
from .create import CreateOptions, create, create_value
from .dom import Element, NodeRange, TextNode, parse_html
from .errors import InvalidRangeError, PayloadError, RichTextError, UnsupportedValueError
from .formatting import apply_format, remove_format
from .queries import get_active_format, get_selected_text, is_empty
from .structure import concat, insert, join, remove, replace, slice, split

__all__ = [
    "Format",
    "Value",
    "Record",
    "MultilineRecord",
    "Selection",
    "PathSelection",
    "Element",
    "TextNode",
    "NodeRange",
    "parse_html",
    "CreateOptions",
    "create",
    "create_value",
    "apply_format",
    "remove_format",
    "get_active_format",
    "get_selected_text",
    "is_empty",
    "concat",
    "join",
    "slice",
    "split",
    "insert",
    "remove",
    "replace",
    "RichTextError",
    "InvalidRangeError",
    "UnsupportedValueError",
    "PayloadError",
]

__version__ = "0.1.0"
