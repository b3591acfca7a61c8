"""Depth-first walk that spends a length budget across a document tree."""

from bs4 import NavigableString, Tag

from preview.services import document
from preview.services.budget import Budget, has_content, seal, truncate_text
from preview.services.document import NodeKind


class TreeWalker:
    """Single pre-order pass over a tree, mutating it in place.

    - other nodes (comments, scripts) are always removed;
    - text nodes are charged against the budget, or removed once it is spent;
    - elements are descended into, or removed whole once it is spent.
    """

    def __init__(self, budget: Budget):
        self.budget = budget
        # Text node that spent the budget exactly, with nothing cut yet
        self.tail: NavigableString | None = None

    def walk(self, element: Tag) -> None:
        for node in document.children(element):
            node_kind = document.kind(node)
            if node_kind is NodeKind.OTHER:
                document.remove(node)
            elif node_kind is NodeKind.TEXT:
                self._visit_text(node)
            elif node_kind is NodeKind.ELEMENT:
                self._visit_element(node)
            else:
                raise ValueError(f"Unhandled node kind: {node_kind}")

    def _visit_text(self, node: NavigableString) -> None:
        text = document.text_of(node)
        if self.budget.spent:
            if has_content(text):
                self._seal_tail()
            document.remove(node)
            return

        node = document.set_text(node, truncate_text(self.budget, text))
        if self.budget.spent and not self.budget.truncated:
            self.tail = node

    def _visit_element(self, node: Tag) -> None:
        if not self.budget.spent:
            self.walk(node)
            return
        # a dropped element is dropped content, text or not
        self._seal_tail()
        document.remove(node)

    def _seal_tail(self) -> None:
        """Content is being dropped: put the ellipsis on the exact-fit node."""
        if self.tail is None or self.budget.truncated:
            return
        document.set_text(self.tail, seal(self.budget, document.text_of(self.tail)))
        self.tail = None


def apply_budget(root: Tag, budget: Budget) -> Tag:
    TreeWalker(budget).walk(root)
    return root
