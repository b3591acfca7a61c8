"""Document tree adapter over BeautifulSoup.

The truncation core only sees three kinds of node (text, element, other)
and a handful of read/write operations; everything about parsing,
entities, selectors and serialization stays in here.
"""

from collections.abc import Iterable, Iterator
from enum import Enum

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import (
    CData,
    Comment,
    Declaration,
    Doctype,
    PageElement,
    ProcessingInstruction,
)
from bs4.formatter import HTMLFormatter

# Private wrapper so top-level text without a tag still has a parent
ROOT_TAG = "preview-root"

# Raw-text containers are not content
_RAW_TEXT_TAGS = frozenset({"script", "style"})

_NON_TEXT_STRINGS = (Comment, CData, ProcessingInstruction, Declaration, Doctype)

# HTML5 output (void tags without a slash, boolean attributes) writing
# text verbatim, so undecoded entity references survive
_VERBATIM_HTML5 = HTMLFormatter(
    entity_substitution=None,
    void_element_close_prefix=None,
    empty_attributes_are_booleans=True,
)


class NodeKind(str, Enum):
    TEXT = "text"
    ELEMENT = "element"
    OTHER = "other"


def kind(node: PageElement) -> NodeKind:
    if isinstance(node, Tag):
        if node.name in _RAW_TEXT_TAGS:
            return NodeKind.OTHER
        return NodeKind.ELEMENT
    if isinstance(node, _NON_TEXT_STRINGS):
        return NodeKind.OTHER
    if isinstance(node, NavigableString):
        return NodeKind.TEXT
    return NodeKind.OTHER


def parse(markup: str, decode_entities: bool = False) -> Tag:
    """Parse markup into a tree and return its wrapper root element.

    Without ``decode_entities`` every ``&`` is escaped first, so entity
    references survive parsing verbatim and count by their literal text.
    """
    if not decode_entities:
        markup = markup.replace("&", "&amp;")
    soup = BeautifulSoup(f"<{ROOT_TAG}>{markup}</{ROOT_TAG}>", "html.parser")
    return soup.find(ROOT_TAG)


def serialize(root: Tag, decode_entities: bool = False) -> str:
    """Inner markup of ``root``."""
    formatter = "html5" if decode_entities else _VERBATIM_HTML5
    return root.decode_contents(formatter=formatter)


def remove_matching(root: Tag, selectors: Iterable[str]) -> int:
    """Remove every descendant matching any selector; return how many.

    Raises ``soupsieve.SelectorSyntaxError`` for a malformed selector.
    """
    query = ",".join(selectors)
    if not query:
        return 0
    matched = root.select(query)
    for element in matched:
        element.decompose()
    return len(matched)


def children(element: Tag) -> list[PageElement]:
    """Snapshot of the child nodes, safe to mutate while iterating."""
    return list(element.contents)


def text_of(node: NavigableString) -> str:
    return str(node)


def set_text(node: NavigableString, text: str) -> NavigableString:
    """Replace a text node's content; returns the node now in the tree."""
    replacement = type(node)(text)
    node.replace_with(replacement)
    return replacement


def remove(node: PageElement) -> None:
    if isinstance(node, Tag):
        node.decompose()
    else:
        node.extract()


def iter_text(element: Tag) -> Iterator[str]:
    """Text node contents reachable through elements, in document order."""
    for node in element.contents:
        node_kind = kind(node)
        if node_kind is NodeKind.TEXT:
            yield str(node)
        elif node_kind is NodeKind.ELEMENT:
            yield from iter_text(node)


def full_text(root: Tag) -> str:
    return "".join(iter_text(root))
