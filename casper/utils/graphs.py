"""Dependency graph helpers: topological sort and cycle detection."""

import heapq


class CircularDependencyError(Exception):
    """Raised when a dependency graph contains a cycle."""

    def __init__(self, message: str, nodes: list[str] | None = None):
        super().__init__(message)
        self.nodes = nodes or []


def topological_sort(
    dependencies: dict[str, list[str]],
    priority: dict[str, int] | None = None,
) -> list[str]:
    """
    Topological sort of a dependency mapping using Kahn's algorithm.

    Every node is emitted after all of the nodes it depends on. Among nodes
    that are ready at the same time, the one with the lowest priority value
    goes first; without a priority mapping, nodes are taken in the insertion
    order of ``dependencies``. Dependencies on names that are not keys of the
    mapping are ignored.

    Args:
        dependencies: Mapping of node -> list of nodes it depends on
        priority: Optional tie-break rank per node (lower first)

    Returns:
        List of nodes in dependency order

    Raises:
        CircularDependencyError: If circular dependencies exist

    Example:
        >>> topological_sort({"b": ["a"], "a": []})
        ['a', 'b']
    """
    if priority is None:
        priority = {name: i for i, name in enumerate(dependencies)}

    # Build adjacency list and in-degree count
    dependents: dict[str, list[str]] = {name: [] for name in dependencies}
    in_degree = {name: 0 for name in dependencies}

    for name, deps in dependencies.items():
        for dep in dict.fromkeys(deps):
            if dep in dependencies:
                dependents[dep].append(name)
                in_degree[name] += 1

    ready = [(priority[name], name) for name, degree in in_degree.items() if degree == 0]
    heapq.heapify(ready)
    order: list[str] = []

    while ready:
        _, node = heapq.heappop(ready)
        order.append(node)

        for dependent in dependents[node]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                heapq.heappush(ready, (priority[dependent], dependent))

    # Anything left never reached in-degree zero
    if len(order) != len(dependencies):
        emitted = set(order)
        remaining = [name for name in dependencies if name not in emitted]
        cycle = find_cycle({name: dependencies[name] for name in remaining})
        involved = cycle or remaining
        raise CircularDependencyError(
            f"Circular dependency detected involving: {' -> '.join(involved)}",
            nodes=remaining,
        )

    return order


def find_cycle(dependencies: dict[str, list[str]]) -> list[str]:
    """Return one dependency cycle as a closed path, or an empty list.

    The path starts and ends on the same node, e.g. ``["a", "b", "a"]``.
    """
    visiting: list[str] = []
    on_path: set[str] = set()
    done: set[str] = set()

    def visit(node: str) -> list[str]:
        visiting.append(node)
        on_path.add(node)
        for dep in dependencies.get(node, []):
            if dep not in dependencies or dep in done:
                continue
            if dep in on_path:
                start = visiting.index(dep)
                return visiting[start:] + [dep]
            found = visit(dep)
            if found:
                return found
        visiting.pop()
        on_path.discard(node)
        done.add(node)
        return []

    for name in dependencies:
        if name not in done:
            cycle = visit(name)
            if cycle:
                return cycle
    return []
