"""Minimal markup tree consumed by the converter, plus lxml-backed HTML parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

from lxml import etree
from lxml import html as lxml_html

__all__ = ["TextNode", "Element", "Node", "NodeRange", "element", "parse_html", "from_lxml"]


@dataclass(eq=False, slots=True)
class TextNode:
    """A run of character data."""

    data: str = ""


@dataclass(eq=False, slots=True)
class Element:
    """An element with a tag name, ordered attributes and ordered children.

    Nodes compare by identity: a :class:`NodeRange` points at node instances.
    """

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)

    @property
    def first_child(self) -> Node | None:
        return self.children[0] if self.children else None

    @property
    def last_child(self) -> Node | None:
        return self.children[-1] if self.children else None

    def has_attributes(self) -> bool:
        return bool(self.attributes)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the attribute ``name`` or ``default``."""

        return self.attributes.get(name, default)

    def find(self, tag: str) -> Element | None:
        """Return the first descendant element named ``tag`` (depth first, document order)."""

        wanted = tag.lower()
        for child in self.children:
            if not isinstance(child, Element):
                continue
            if child.tag == wanted:
                return child
            nested = child.find(wanted)
            if nested is not None:
                return nested
        return None

    def iter_text(self) -> Iterator[str]:
        for child in self.children:
            if isinstance(child, TextNode):
                yield child.data
            else:
                yield from child.iter_text()


Node = Union[TextNode, Element]


@dataclass(eq=False, slots=True)
class NodeRange:
    """Two boundaries located as ``(container, offset)`` pairs.

    The offset is a character index when the container is a :class:`TextNode`
    and a child index when it is an :class:`Element`.
    """

    start_container: Node
    start_offset: int
    end_container: Node
    end_offset: int

    @classmethod
    def collapsed(cls, container: Node, offset: int) -> NodeRange:
        """Return a caret range at ``offset`` inside ``container``."""

        return cls(container, offset, container, offset)


def parse_html(markup: str) -> Element:
    """Parse an HTML fragment and return its ``body`` element as a tree."""

    document = lxml_html.document_fromstring(f"<html><body>{markup or ''}</body></html>")
    body = document.find("body")
    if body is None:  # pragma: no cover - lxml always creates a body for this wrapper
        return Element("body")
    return from_lxml(body)


def from_lxml(source: etree._Element) -> Element:
    """Convert an lxml element (``text``/``tail`` model) into a node tree."""

    children: List[Node] = []
    if source.text:
        children.append(TextNode(source.text))
    for child in source:
        # Comments and processing instructions carry a callable tag; only their tail is content.
        if isinstance(child.tag, str):
            children.append(from_lxml(child))
        if child.tail:
            children.append(TextNode(child.tail))
    return Element(
        tag=_local_name(source.tag),
        attributes={str(name): str(value) for name, value in source.attrib.items()},
        children=children,
    )


def _local_name(tag: str) -> str:
    if tag.startswith("{"):
        tag = etree.QName(tag).localname
    return tag.lower()


def element(tag: str, *children: Node | str, attributes: Optional[Dict[str, str]] = None) -> Element:
    """Build an element by hand; string children become text nodes."""

    nodes: List[Node] = [TextNode(child) if isinstance(child, str) else child for child in children]
    return Element(tag=tag, attributes=dict(attributes or {}), children=nodes)
