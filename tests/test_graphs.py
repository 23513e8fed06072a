"""Tests for topological sorting and cycle detection."""

import pytest

from casper.utils import CircularDependencyError, find_cycle, topological_sort


def test_dependencies_come_first():
    assert topological_sort({"b": ["a"], "a": []}) == ["a", "b"]


def test_ties_follow_insertion_order():
    assert topological_sort({"c": [], "a": [], "b": []}) == ["c", "a", "b"]


def test_priority_overrides_insertion_order():
    order = topological_sort({"c": [], "a": [], "b": []}, priority={"a": 0, "b": 1, "c": 2})
    assert order == ["a", "b", "c"]


def test_ready_nodes_are_taken_by_priority_not_discovery():
    # "late" becomes ready after "root" but outranks "b"
    deps = {"root": [], "b": [], "late": ["root"]}
    order = topological_sort(deps, priority={"root": 0, "late": 1, "b": 2})
    assert order == ["root", "late", "b"]


def test_unknown_dependencies_are_ignored():
    assert topological_sort({"a": ["missing"], "b": ["a"]}) == ["a", "b"]


def test_duplicate_dependencies_counted_once():
    assert topological_sort({"a": [], "b": ["a", "a"]}) == ["a", "b"]


def test_cycle_raises_with_path():
    with pytest.raises(CircularDependencyError) as exc_info:
        topological_sort({"a": ["b"], "b": ["a"], "c": []})

    assert exc_info.value.nodes == ["a", "b"]
    assert "a -> b -> a" in str(exc_info.value)


def test_self_dependency_is_a_cycle():
    with pytest.raises(CircularDependencyError):
        topological_sort({"a": ["a"]})


def test_nodes_downstream_of_a_cycle_are_reported():
    with pytest.raises(CircularDependencyError) as exc_info:
        topological_sort({"a": ["b"], "b": ["a"], "c": ["a"]})
    assert set(exc_info.value.nodes) == {"a", "b", "c"}


class TestFindCycle:
    def test_acyclic(self):
        assert find_cycle({"a": [], "b": ["a"]}) == []

    def test_closed_path(self):
        cycle = find_cycle({"a": ["b"], "b": ["c"], "c": ["a"]})
        assert cycle == ["a", "b", "c", "a"]

    def test_cycle_not_reachable_from_first_node(self):
        cycle = find_cycle({"x": [], "a": ["b"], "b": ["a"]})
        assert cycle == ["a", "b", "a"]
