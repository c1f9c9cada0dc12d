"""
Stack resolution by name.

Stack names are unique among siblings but not across the whole tree, so
lookups search the tree in document order instead of indexing it.
"""

import logging
from typing import Optional

from ora_tools.errors import ManifestError
from ora_tools.ora.manifest import StackNode, StackTree

logger = logging.getLogger(__name__)


def root_stack(tree: StackTree) -> StackNode:
    """
    Return the designated root stack: the first sub-stack of the top-level
    stack.

    :raises ManifestError: if the top-level stack has no sub-stack.
    """
    if not tree.stack.children:
        raise ManifestError("root node not found")
    return tree.stack.children[0]


def root_substack_names(node: StackNode) -> list[str]:
    """Names of the immediate sub-stacks of `node`, in document order."""
    return [child.name for child in node.children]


def find_substack(node: StackNode, name: str) -> Optional[StackNode]:
    """
    Find the first stack named `name` in the subtree rooted at `node`.

    The search is depth-first pre-order, so `node` itself wins over its
    descendants and earlier branches win over later ones.

    :return: :py:class:`~ora_tools.ora.manifest.StackNode` or `None`.
    """
    pending = [node]
    while pending:
        current = pending.pop()
        if current.name == name:
            return current
        pending.extend(reversed(current.children))
    return None
