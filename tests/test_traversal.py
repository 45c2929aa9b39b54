"""Tests for the shared breadth-first walk."""

from albumscan.traversal import walk_breadth_first

TREE = {
    "root": ["a", "b"],
    "a": ["a1", "a2"],
    "b": ["b1"],
}


def test_visits_in_breadth_first_order():
    seen = []

    def visit(node):
        seen.append(node)
        return TREE.get(node, [])

    assert walk_breadth_first("root", visit) is True
    assert seen == ["root", "a", "b", "a1", "a2", "b1"]


def test_visit_can_stop_the_walk():
    seen = []

    def visit(node):
        seen.append(node)
        if node == "a":
            return None
        return TREE.get(node, [])

    assert walk_breadth_first("root", visit) is False
    assert seen == ["root", "a"]


def test_empty_children_prune_branch():
    seen = []

    def visit(node):
        seen.append(node)
        return [] if node == "a" else TREE.get(node, [])

    walk_breadth_first("root", visit)
    assert "a1" not in seen
    assert "b1" in seen
