"""Build rich-text records from a markup tree and an optional node range."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from .core.formats import Format, FormatSlot
from .core.selection import Path, PathSelection, Selection
from .core.value import MultilineRecord, Record, Value, holes
from .dom import Element, Node, NodeRange, TextNode, parse_html
from .queries import is_empty

__all__ = ["CreateOptions", "create", "create_value"]

LOGGER = logging.getLogger(__name__)

LINE_BREAK_TAG = "br"


@dataclass(slots=True)
class CreateOptions:
    """Hooks that customise how a tree is converted.

    ``remove_node_match`` drops a node with its subtree, ``unwrap_node_match``
    keeps the children but no format for the node itself, ``filter_string``
    post-processes text (offsets use the filtered length) and
    ``remove_attribute_match`` drops attributes by name. Every hook is optional.
    """

    remove_node_match: Optional[Callable[[Element], bool]] = None
    unwrap_node_match: Optional[Callable[[Element], bool]] = None
    filter_string: Optional[Callable[[str], str]] = None
    remove_attribute_match: Optional[Callable[[str], bool]] = None

    def should_remove(self, node: Element) -> bool:
        return bool(self.remove_node_match is not None and self.remove_node_match(node))

    def should_unwrap(self, node: Element) -> bool:
        return bool(self.unwrap_node_match is not None and self.unwrap_node_match(node))

    def keeps_attribute(self, name: str) -> bool:
        return not (self.remove_attribute_match is not None and self.remove_attribute_match(name))

    def clean(self, text: str) -> str:
        """Return ``text`` as it enters the value."""

        # Newlines in text nodes only format the markup; real breaks are ``br`` elements.
        text = text.replace("\n", "")
        if self.filter_string is not None:
            text = self.filter_string(text)
        return text


_DEFAULT_OPTIONS = CreateOptions()


def create(
    element: Element | str | None = None,
    boundary: NodeRange | None = None,
    multiline_tag: str | None = None,
    options: CreateOptions | None = None,
) -> Union[Record, MultilineRecord]:
    """Create a record from ``element`` and resolve ``boundary`` into a selection.

    With ``multiline_tag`` only the direct children carrying that tag are read,
    each as its own block, and the selection is expressed as block paths.
    """

    if isinstance(element, str):
        element = parse_html(element)
    resolved = options or _DEFAULT_OPTIONS
    if not multiline_tag:
        return _create_record(element, boundary, resolved)
    return _create_multiline_record(element, boundary, multiline_tag.lower(), resolved)


def create_value(
    element: Element | str | None = None,
    multiline_tag: str | None = None,
    options: CreateOptions | None = None,
) -> Union[Value, List[Value]]:
    """Create only the value (or list of block values) for ``element``."""

    return create(element, None, multiline_tag, options).value


def _create_multiline_record(
    element: Element | None,
    boundary: NodeRange | None,
    multiline_tag: str,
    options: CreateOptions,
) -> MultilineRecord:
    record = MultilineRecord()
    if element is None or not element.children:
        return record

    start = end = None
    for child in element.children:
        if not isinstance(child, Element) or child.tag != multiline_tag:
            continue
        index = len(record.value)
        block = _create_record(child, boundary, options)
        if boundary is not None:
            resolved = _block_path(index, child, boundary.start_container, boundary.start_offset, block.selection.start)
            start = resolved or start
            resolved = _block_path(index, child, boundary.end_container, boundary.end_offset, block.selection.end)
            end = resolved or end
        record.value.append(block.value)

    record.selection = PathSelection(start, end)
    return record


def _block_path(
    index: int,
    block: Element,
    container: Node,
    offset: int,
    resolved: int | None,
) -> Path | None:
    # Only the block's edges collapse to ``(index,)``.
    if container is block and (offset == 0 or offset >= len(block.children)):
        return (index,)
    if resolved is not None:
        return (index, resolved)
    return None


def _create_record(element: Element | None, boundary: NodeRange | None, options: CreateOptions) -> Record:
    if element is None or not element.children:
        return Record()

    text = ""
    formats: List[FormatSlot] = []
    selection = Selection()

    for index, node in enumerate(element.children):
        if boundary is not None:
            _resolve_child_index(selection, boundary, element, index, len(text))

        if isinstance(node, TextNode):
            if boundary is not None:
                _resolve_text_offset(selection, boundary, node, len(text), options)
            cleaned = options.clean(node.data)
            text += cleaned
            formats.extend(holes(len(cleaned)))
            continue

        if not isinstance(node, Element):
            continue
        if options.should_remove(node):
            LOGGER.debug("Removing <%s> with its subtree", node.tag)
            continue

        unwrap = options.should_unwrap(node)
        if node.tag == LINE_BREAK_TAG:
            if not unwrap:
                text += "\n"
                formats.append(None)
            continue

        attributes = None if unwrap else _collect_attributes(node, options)
        inner = _create_record(node, boundary, options)
        start = len(text)

        if inner.selection.start is not None:
            selection.start = start + inner.selection.start
        if inner.selection.end is not None:
            selection.end = start + inner.selection.end

        if not unwrap and attributes is None and is_empty(inner.value):
            LOGGER.debug("Dropping empty <%s> without attributes", node.tag)
            continue

        if not unwrap and attributes is not None and not inner.value.text:
            _place_object(formats, start, Format(node.tag, attributes, object=True))
            continue

        text += inner.value.text
        _merge_slots(formats, start, None if unwrap else Format(node.tag, attributes), inner.value.formats)

    if boundary is not None:
        _resolve_container_end(selection, boundary, element, len(text))

    return Record(Value(text=text, formats=formats), selection)


def _collect_attributes(node: Element, options: CreateOptions) -> Dict[str, str] | None:
    if not node.has_attributes():
        return None
    kept = {name: value for name, value in node.attributes.items() if options.keeps_attribute(name)}
    return kept or None


def _place_object(formats: List[FormatSlot], index: int, format: Format) -> None:
    """Put an object format in front of whatever already sits at ``index``."""

    _pad(formats, index + 1)
    existing = formats[index]
    formats[index] = [format] if existing is None else [format, *existing]


def _merge_slots(
    formats: List[FormatSlot],
    start: int,
    format: Format | None,
    inner: List[FormatSlot],
) -> None:
    _pad(formats, start + len(inner))
    for offset in range(len(inner) - 1, -1, -1):
        index = start + offset
        merged = list(formats[index] or ())
        if format is not None:
            merged.append(format)
        if inner[offset]:
            merged.extend(inner[offset])
        formats[index] = merged or None


def _pad(formats: List[FormatSlot], length: int) -> None:
    if len(formats) < length:
        formats.extend(holes(length - len(formats)))


def _resolve_child_index(
    selection: Selection,
    boundary: NodeRange,
    element: Element,
    index: int,
    length: int,
) -> None:
    if boundary.start_container is element and boundary.start_offset == index:
        selection.start = length
    if boundary.end_container is element and boundary.end_offset == index:
        selection.end = length


def _resolve_text_offset(
    selection: Selection,
    boundary: NodeRange,
    node: TextNode,
    length: int,
    options: CreateOptions,
) -> None:
    if boundary.start_container is node:
        selection.start = length + len(options.clean(node.data[: boundary.start_offset]))
    if boundary.end_container is node:
        selection.end = length + len(options.clean(node.data[: boundary.end_offset]))


def _resolve_container_end(selection: Selection, boundary: NodeRange, element: Element, length: int) -> None:
    # An offset past the last child lands on the element's end.
    child_count = len(element.children)
    if boundary.start_container is element and boundary.start_offset >= child_count:
        selection.start = length
    if boundary.end_container is element and boundary.end_offset >= child_count:
        selection.end = length
