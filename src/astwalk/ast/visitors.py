#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/astwalk/ast/visitors.py
"""Visitor contract for AST traversal.

A visitor is a pass-specific object that inspects or rewrites a forest while
a :class:`~astwalk.ast.traverser.NodeTraverser` walks it. The contract is a
closed set of four hooks; each is optional and defaults to a no-op that
returns ``KEEP``:

- ``before_traverse(forest)``: called once, before any node is entered
- ``enter_node(node)``: called on the way down, before the node's children
- ``leave_node(node)``: called on the way up, after the node's children
- ``after_traverse(forest)``: called once, after the last node was left

See :mod:`astwalk.ast.actions` for the values each hook may return.

"""

from __future__ import annotations

from typing import Any, Optional

from astwalk.ast.actions import KEEP, EnterAction, ForestAction, LeaveAction
from astwalk.ast.nodes import Node


class NodeVisitor:
    """Base class for traversal passes.

    Subclasses override only the hooks they need. A stateful visitor should
    reset its state in :meth:`before_traverse` if it is reused across
    traversals.

    Examples
    --------
    Count nodes by kind:

        >>> from collections import Counter
        >>> class KindCounter(NodeVisitor):
        ...     def before_traverse(self, forest):
        ...         self.counts = Counter()
        ...
        ...     def enter_node(self, node):
        ...         self.counts[type(node).__name__] += 1

    Drop every ``Nop`` statement:

        >>> class NopRemover(NodeVisitor):
        ...     def leave_node(self, node):
        ...         if isinstance(node, Nop):
        ...             return REMOVE_NODE

    """

    def before_traverse(self, forest: list[Any]) -> Optional[ForestAction]:
        """Inspect or replace the forest before traversal starts.

        Parameters
        ----------
        forest : list
            The forest as produced by the previous visitor in the chain

        Returns
        -------
        Keep, ReplaceForest or None

        """
        return KEEP

    def enter_node(self, node: Node) -> Optional[EnterAction]:
        """Inspect or replace a node before its children are traversed.

        Parameters
        ----------
        node : Node
            The node as produced by the previous visitor in the chain

        Returns
        -------
        Keep, ReplaceNode, SkipChildren or None

        """
        return KEEP

    def leave_node(self, node: Node) -> Optional[LeaveAction]:
        """Inspect, replace, remove or splice a node after its children were traversed.

        Parameters
        ----------
        node : Node
            The node as produced by the previous visitor in the chain

        Returns
        -------
        Keep, ReplaceNode, RemoveNode, SpliceNodes or None

        """
        return KEEP

    def after_traverse(self, forest: list[Any]) -> Optional[ForestAction]:
        """Inspect or replace the forest after traversal finished.

        Parameters
        ----------
        forest : list
            The structurally final forest

        Returns
        -------
        Keep, ReplaceForest or None

        """
        return KEEP


__all__ = ["NodeVisitor"]
