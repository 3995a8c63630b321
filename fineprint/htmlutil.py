"""Extracting the visible text of an HTML document's body."""

from __future__ import annotations

from typing import IO, Iterator, Union
from xml.etree.ElementTree import Element

import html5lib

HtmlSource = Union[str, bytes, IO[str], IO[bytes]]


def _text_pieces(root: Element) -> Iterator[str]:
    """Yield the text nodes under root in document order, skipping comments."""
    stack: list[Union[Element, str]] = [root]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            yield item
            continue
        if isinstance(item.tag, str) and item.text:
            yield item.text
        for child in reversed(item):
            if child.tail:
                stack.append(child.tail)
            stack.append(child)


def extract_text(source: HtmlSource) -> str:
    """Return the body's text nodes, trimmed and joined by single spaces.

    Raises ValueError if the document has no body element.
    """
    document = html5lib.parse(source, treebuilder="etree", namespaceHTMLElements=False)
    body = document if document.tag == "body" else next(document.iter("body"), None)
    if body is None:
        raise ValueError("no body element found in HTML")
    pieces = (piece.strip() for piece in _text_pieces(body))
    return " ".join(piece for piece in pieces if piece)