"""Tests for the Box tree."""

import pytest

from pagequill.model import Box
from pagequill.model.style import INLINE, NONE, TABLE_ROW


class TestBoxConstruction:
    """Test suite for building boxes."""

    def test_default_style_from_tag(self):
        """Tags pick their default display role."""
        assert Box("div").style.display == "block"
        assert Box("span").style.display == INLINE
        assert Box("tr").style.display == TABLE_ROW
        assert Box("paginate-source").style.display == NONE

    def test_children_get_parent(self):
        child = Box("p")
        parent = Box("div", children=[child])

        assert child.parent is parent

    def test_text_node(self):
        node = Box.text_node("hello")

        assert node.is_text
        assert node.inner_text() == "hello"
        assert not node.has_children()

    def test_identity_semantics(self):
        """Equal-looking boxes stay distinct and hashable."""
        first = Box("p")
        second = Box("p")

        assert first != second
        assert len({first, second}) == 2


class TestBoxMutation:
    """Test suite for tree mutation."""

    def test_append_reparents(self):
        child = Box("p")
        old_parent = Box("div", children=[child])
        new_parent = Box("div")

        new_parent.append(child)

        assert child.parent is new_parent
        assert old_parent.children == []
        assert new_parent.children == [child]

    def test_remove_detaches_only_self(self):
        first, second = Box("p"), Box("p")
        parent = Box("div", children=[first, second])

        first.remove()

        assert parent.children == [second]
        assert first.parent is None

    def test_remove_without_parent_is_noop(self):
        box = Box("p")
        box.remove()
        assert box.parent is None

    def test_replace_children(self):
        old = Box("p")
        parent = Box("div", children=[old])
        new = Box("span")

        parent.replace_children([new])

        assert parent.children == [new]
        assert old.parent is None
        assert new.parent is parent


class TestBoxClone:
    """Test suite for cloning."""

    def test_shallow_clone_has_no_children(self):
        box = Box("div", {"class": "a"}, children=[Box("p")])

        clone = box.clone()

        assert clone.children == []
        assert clone.attributes == {"class": "a"}
        assert clone.origin is box
        assert clone.parent is None

    def test_deep_clone_copies_subtree(self):
        inner = Box.text_node("x")
        box = Box("div", children=[Box("p", children=[inner])])

        clone = box.clone(deep=True)

        cloned_inner = clone.children[0].children[0]
        assert cloned_inner is not inner
        assert cloned_inner.text == "x"
        assert cloned_inner.source is inner

    def test_clone_of_clone_points_to_source(self):
        box = Box("p")

        assert box.clone().clone().origin is box

    def test_clone_style_is_independent(self):
        box = Box("div")
        clone = box.clone()

        clone.style.height = 10.0

        assert box.style.height is None

    def test_clone_attributes_are_independent(self):
        box = Box("div", {"data-key": "a"})
        clone = box.clone()

        clone.set("data-status", "solved")

        assert "data-status" not in box.attributes


class TestBoxNavigation:
    """Test suite for traversal helpers."""

    @pytest.fixture
    def tree(self):
        return Box("div", children=[
            Box("h1", children=[Box.text_node("Title")]),
            Box("p", {"class": "lead intro"}, children=[Box.text_node("Hello "), Box("b", children=[Box.text_node("world")])]),
            Box("p", children=[Box.text_node("Bye")]),
        ])

    def test_find_all_in_document_order(self, tree):
        found = tree.find_all("p")

        assert [box.inner_text() for box in found] == ["Hello world", "Bye"]

    def test_find_all_with_predicate(self, tree):
        found = tree.find_all("p", lambda box: box.has_class("lead"))

        assert len(found) == 1

    def test_find_all_excludes_self(self):
        box = Box("p", children=[Box("p")])

        assert len(box.find_all("p")) == 1

    def test_leaves(self, tree):
        assert [leaf.text for leaf in tree.leaves()] == ["Title", "Hello ", "world", "Bye"]

    def test_previous_siblings_nearest_first(self, tree):
        last = tree.children[2]

        assert [box.tag for box in last.previous_siblings()] == ["p", "h1"]

    def test_has_class(self, tree):
        lead = tree.children[1]

        assert lead.has_class("intro")
        assert not lead.has_class("int")
