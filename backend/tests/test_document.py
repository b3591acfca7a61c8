"""Tests for the BeautifulSoup document adapter."""

import pytest
from soupsieve import SelectorSyntaxError

from preview.services import document
from preview.services.document import NodeKind


def test_parse_wraps_top_level_text():
    root = document.parse("plain <b>bold</b>")
    assert document.serialize(root) == "plain <b>bold</b>"


def test_entities_kept_verbatim_by_default():
    root = document.parse("a &amp; b")
    assert document.full_text(root) == "a &amp; b"
    assert document.serialize(root) == "a &amp; b"


def test_entities_decoded_on_request():
    root = document.parse("a &amp; b", decode_entities=True)
    assert document.full_text(root) == "a & b"
    assert document.serialize(root, decode_entities=True) == "a &amp; b"


def test_serialize_keeps_html5_void_tags():
    root = document.parse("<p>a<br>b c</p>")
    assert document.serialize(root) == "<p>a<br>b c</p>"


def test_node_kinds():
    root = document.parse("t<!-- c --><span>s</span><script>x()</script>")
    kinds = [document.kind(n) for n in document.children(root)]
    assert kinds == [
        NodeKind.TEXT,
        NodeKind.OTHER,
        NodeKind.ELEMENT,
        NodeKind.OTHER,
    ]


def test_full_text_skips_non_content():
    root = document.parse("<p>a<script>x()</script><!-- c -->b<i>c</i></p>")
    assert document.full_text(root) == "abc"


def test_remove_matching():
    root = document.parse(
        '<p>a<img src="x.png"><span class="ad">b</span></p>'
    )
    assert document.remove_matching(root, ["img", ".ad"]) == 2
    assert document.serialize(root) == "<p>a</p>"


def test_remove_matching_without_selectors():
    root = document.parse("<p>a</p>")
    assert document.remove_matching(root, []) == 0


def test_remove_matching_bad_selector():
    root = document.parse("<p>a</p>")
    with pytest.raises(SelectorSyntaxError):
        document.remove_matching(root, ["p["])


def test_set_text_replaces_node():
    root = document.parse("<p>old</p>")
    text = root.p.contents[0]
    new = document.set_text(text, "new")
    assert document.text_of(new) == "new"
    assert document.serialize(root) == "<p>new</p>"
