#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tree helpers shared by the test suite."""

from mdcallouts.ast import Node, get_node_children


def collect_nodes(root: Node, node_type: type | None = None) -> list[Node]:
    """Return every node under ``root`` (``root`` included) in document order."""
    found = []
    pending = [root]
    while pending:
        node = pending.pop()
        if node_type is None or isinstance(node, node_type):
            found.append(node)
        pending.extend(reversed(get_node_children(node)))
    return found
