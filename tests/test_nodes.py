"""Tests for the mutable virtual tree and its adapter."""

import pytest

from tessera.nodes import Comment, Element, Fragment, Text
from tessera.tree import DEFAULT_ADAPTER, VirtualTreeAdapter


class TestTextSplit:
    """Text.split keeps the head and inserts the tail after it."""

    def test_split_attached(self) -> None:
        text = Text("hello")
        parent = Fragment(children=[text, Element("b")])
        tail = text.split(2)
        assert text.data == "he"
        assert tail.data == "llo"
        assert parent.children[1] is tail
        assert tail.parent is parent

    def test_split_at_edges(self) -> None:
        text = Text("ab")
        Fragment(children=[text])
        assert text.split(0).data == "ab"
        assert text.data == ""

    def test_split_detached(self) -> None:
        tail = Text("ab").split(1)
        assert tail.parent is None

    def test_split_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            Text("ab").split(3)


class TestTreeEditing:
    """Parent bookkeeping."""

    def test_constructor_adopts_children(self) -> None:
        child = Text("x")
        parent = Element("p", children=[child])
        assert child.parent is parent

    def test_append_moves_node(self) -> None:
        child = Text("x")
        first = Element("a", children=[child])
        second = Element("b")
        second.append(child)
        assert first.children == []
        assert second.children == [child]
        assert child.parent is second

    def test_remove(self) -> None:
        child = Text("x")
        parent = Fragment(children=[child])
        child.remove()
        assert parent.children == []
        assert child.parent is None
        child.remove()  # detached: no-op

    def test_index_by_identity(self) -> None:
        a, b = Text("same"), Text("same")
        parent = Fragment(children=[a, b])
        assert parent.index(b) == 1
        with pytest.raises(ValueError):
            parent.index(Text("same"))

    def test_clone_is_deep(self) -> None:
        original = Element("p", {"id": "x"}, {"items": [1]}, children=[Text("t")])
        copy = original.clone()
        copy.attributes["id"] = "y"
        copy.children[0].data = "u"
        assert original.attributes == {"id": "x"}
        assert original.children[0].data == "t"
        assert copy.children[0].parent is copy
        assert copy.properties == {"items": [1]}

    def test_text_content(self) -> None:
        tree = Fragment(children=[Text("a"), Element("b", children=[Text("c")]), Comment("x")])
        assert tree.text_content == "ac"

    def test_iter_nodes_preorder(self) -> None:
        tree = Fragment(children=[Element("a", children=[Text("1")]), Text("2")])
        kinds = [type(node).__name__ for node in tree.iter_nodes()]
        assert kinds == ["Fragment", "Element", "Text", "Text"]


class TestToggleAttribute:
    """DOM-style toggleAttribute."""

    def test_force_true_adds_valueless(self) -> None:
        element = Element("input")
        assert element.toggle_attribute("disabled", True)
        assert element.attributes == {"disabled": None}

    def test_force_true_keeps_existing_value(self) -> None:
        element = Element("input", {"disabled": "disabled"})
        element.toggle_attribute("disabled", True)
        assert element.attributes == {"disabled": "disabled"}

    def test_force_false_removes(self) -> None:
        element = Element("input", {"disabled": None})
        assert not element.toggle_attribute("disabled", False)
        assert element.attributes == {}

    def test_no_force_flips(self) -> None:
        element = Element("input")
        assert element.toggle_attribute("x")
        assert not element.toggle_attribute("x")


class TestVirtualTreeAdapter:
    """The TreeAdapter implementation over tessera.nodes."""

    def test_walk_skips_comments_and_fragment_root(self) -> None:
        tree = Fragment(children=[Comment("c"), Element("a", children=[Text("t")]), Text("u")])
        walked = list(DEFAULT_ADAPTER.walk(tree))
        assert [type(node).__name__ for node in walked] == ["Element", "Text", "Text"]

    def test_walk_includes_element_root(self) -> None:
        root = Element("div", children=[Element("span")])
        assert [node.tag for node in DEFAULT_ADAPTER.walk(root)] == ["div", "span"]

    def test_walk_deep_tree(self) -> None:
        root = Element("div")
        node = root
        for _ in range(3000):
            child = Element("div")
            node.append(child)
            node = child
        assert sum(1 for _ in DEFAULT_ADAPTER.walk(root)) == 3001

    def test_walk_same_for_clone(self) -> None:
        tree = Fragment(children=[Element("a", children=[Text("x"), Comment("c")]), Text("")])
        original = [type(n).__name__ for n in DEFAULT_ADAPTER.walk(tree)]
        cloned = [type(n).__name__ for n in DEFAULT_ADAPTER.walk(DEFAULT_ADAPTER.clone(tree))]
        assert original == cloned

    def test_is_root(self) -> None:
        adapter = VirtualTreeAdapter()
        assert adapter.is_root(Fragment())
        assert adapter.is_root(Element("p"))
        assert not adapter.is_root(Text("x"))
        assert not adapter.is_root("<p></p>")

    def test_set_text(self) -> None:
        node = Text("old")
        DEFAULT_ADAPTER.set_text(node, "new")
        assert node.data == "new"

    def test_set_property(self) -> None:
        element = Element("x-el")
        DEFAULT_ADAPTER.set_property(element, "items", [1])
        assert element.properties == {"items": [1]}
        assert element.attributes == {}
