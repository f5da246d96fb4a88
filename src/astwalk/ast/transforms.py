#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/astwalk/ast/transforms.py
"""Ready-made visitors and one-shot helpers built on the traversal engine.

This module provides visitors for common passes (collecting, finding,
removing and replacing nodes) and helper functions that run them over a
forest in a single call.

Examples
--------
Extract every call expression:

    >>> from astwalk.ast import transforms
    >>> calls = transforms.extract_nodes(statements, FuncCall)

Drop every ``Nop`` statement without touching the input:

    >>> cleaned = transforms.filter_nodes(statements, lambda n: not isinstance(n, Nop))

Rename variables in place with a callback:

    >>> def rename(node):
    ...     if isinstance(node, Variable) and node.name == "tmp":
    ...         return ReplaceNode(Variable(name="scratch"))
    >>> transforms.transform_nodes(statements, CallbackVisitor(leave=rename))

"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Iterator, Optional, Union

from astwalk.ast.actions import (
    KEEP,
    REMOVE_NODE,
    SKIP_CHILDREN,
    EnterAction,
    ForestAction,
    LeaveAction,
    ReplaceNode,
)
from astwalk.ast.nodes import Node, SlotKind, classify_slot, get_node_children
from astwalk.ast.traverser import NodeTraverser
from astwalk.ast.visitors import NodeVisitor
from astwalk.options import TraverserOptions

logger = logging.getLogger(__name__)

NodePredicate = Callable[[Node], bool]
NodeMatcher = Union[NodePredicate, type, tuple[type, ...], None]


def _as_predicate(matcher: NodeMatcher) -> NodePredicate:
    """Turn a node type, tuple of types, callable or None into a predicate."""
    if matcher is None:
        return lambda n: True
    if isinstance(matcher, (type, tuple)):
        node_types = matcher
        return lambda n: isinstance(n, node_types)
    if callable(matcher):
        return matcher
    raise TypeError(f"Expected a node type, tuple of types, callable or None, got {type(matcher).__name__}")


class CallbackVisitor(NodeVisitor):
    """Visitor that delegates its hooks to plain callables.

    Parameters
    ----------
    enter : callable, optional
        Called as ``enter(node)``; its return value is the enter action
    leave : callable, optional
        Called as ``leave(node)``; its return value is the leave action
    before : callable, optional
        Called as ``before(forest)`` before traversal
    after : callable, optional
        Called as ``after(forest)`` after traversal

    Examples
    --------
    >>> printer = CallbackVisitor(enter=lambda node: print(type(node).__name__))

    """

    def __init__(
        self,
        enter: Optional[Callable[[Node], Optional[EnterAction]]] = None,
        leave: Optional[Callable[[Node], Optional[LeaveAction]]] = None,
        before: Optional[Callable[[list[Any]], Optional[ForestAction]]] = None,
        after: Optional[Callable[[list[Any]], Optional[ForestAction]]] = None,
    ):
        """Initialize the visitor with optional hook callables."""
        self.enter = enter
        self.leave = leave
        self.before = before
        self.after = after

    def before_traverse(self, forest: list[Any]) -> Optional[ForestAction]:
        return self.before(forest) if self.before else KEEP

    def enter_node(self, node: Node) -> Optional[EnterAction]:
        return self.enter(node) if self.enter else KEEP

    def leave_node(self, node: Node) -> Optional[LeaveAction]:
        return self.leave(node) if self.leave else KEEP

    def after_traverse(self, forest: list[Any]) -> Optional[ForestAction]:
        return self.after(forest) if self.after else KEEP


class NodeCollector(NodeVisitor):
    """Visitor that collects nodes matching a condition.

    Nodes are collected on entry, so ``collected`` is in document pre-order.
    The list is reset at the start of every traversal.

    Parameters
    ----------
    predicate : callable or None, default = None
        Function that takes a node and returns True to collect it

    """

    def __init__(self, predicate: Optional[NodePredicate] = None):
        """Initialize the collector with an optional predicate function."""
        self.predicate = predicate or (lambda n: True)
        self.collected: list[Node] = []

    def before_traverse(self, forest: list[Any]) -> None:
        self.collected = []

    def enter_node(self, node: Node) -> None:
        if self.predicate(node):
            self.collected.append(node)


class NodeTypeCollector(NodeCollector):
    """Collector matching nodes by type.

    Parameters
    ----------
    *node_types : type
        Node classes to collect (subclasses match too)

    """

    def __init__(self, *node_types: type):
        """Initialize the collector with the node types to match."""
        if not node_types:
            raise TypeError("NodeTypeCollector requires at least one node type")
        self.node_types = node_types
        super().__init__(_as_predicate(node_types))


class FirstNodeFinder(NodeVisitor):
    """Visitor that records the first node matching a predicate.

    Once a match is found, every node entered afterwards has its children
    skipped, so the rest of the pass only touches the remaining siblings of
    the match and its ancestors.

    Parameters
    ----------
    predicate : callable
        Function that takes a node and returns True for a match

    Attributes
    ----------
    found : Node or None
        The first match in pre-order, or None

    """

    def __init__(self, predicate: NodePredicate):
        """Initialize the finder."""
        self.predicate = predicate
        self.found: Optional[Node] = None

    def before_traverse(self, forest: list[Any]) -> None:
        self.found = None

    def enter_node(self, node: Node) -> Optional[EnterAction]:
        if self.found is not None:
            return SKIP_CHILDREN
        if self.predicate(node):
            self.found = node
            return SKIP_CHILDREN
        return KEEP


class NodeRemover(NodeVisitor):
    """Visitor that removes every node matching a predicate.

    Matching nodes are removed on leave, after their own children were
    traversed. Nodes held in single-node slots can only be removed by a
    traverser configured with ``single_slot_removal="clear"``.

    Parameters
    ----------
    predicate : callable
        Function that takes a node and returns True to remove it

    Attributes
    ----------
    removed : int
        Number of removals requested during the last traversal

    """

    def __init__(self, predicate: NodePredicate):
        """Initialize the remover."""
        self.predicate = predicate
        self.removed = 0

    def before_traverse(self, forest: list[Any]) -> None:
        self.removed = 0

    def leave_node(self, node: Node) -> Optional[LeaveAction]:
        if self.predicate(node):
            self.removed += 1
            return REMOVE_NODE
        return KEEP


class NodeReplacer(NodeVisitor):
    """Visitor that replaces nodes with the result of a function, on leave.

    Parameters
    ----------
    replace : callable
        Called with each node; returning the same node (or None) keeps it,
        returning another node replaces it

    """

    def __init__(self, replace: Callable[[Node], Optional[Node]]):
        """Initialize the replacer."""
        self.replace = replace

    def leave_node(self, node: Node) -> Optional[LeaveAction]:
        replacement = self.replace(node)
        if replacement is None or replacement is node:
            return KEEP
        return ReplaceNode(replacement)


def clone_node(node: Node) -> Node:
    """Create a deep copy of an AST node.

    Parameters
    ----------
    node : Node
        Node to clone

    Returns
    -------
    Node
        Deep copy of the node

    """
    return copy.deepcopy(node)


def clone_forest(forest: list[Any]) -> list[Any]:
    """Create a deep copy of a forest, nested lists included.

    Shared nodes stay shared within the copy.

    Parameters
    ----------
    forest : list
        Forest to clone

    Returns
    -------
    list
        Deep copy of the forest

    """
    return copy.deepcopy(forest)


def walk(forest: list[Any]) -> Iterator[Node]:
    """Iterate over every node of a forest in pre-order, without visitors.

    The forest must not be modified while iterating.

    Parameters
    ----------
    forest : list
        Forest to walk

    Yields
    ------
    Node
        Each node, parents before children

    """
    pending = list(reversed(forest))
    while pending:
        item = pending.pop()
        kind = classify_slot(item)
        if kind is SlotKind.SEQUENCE:
            pending.extend(reversed(item))
        elif kind is SlotKind.SINGLE:
            yield item
            pending.extend(reversed(get_node_children(item)))


def transform_nodes(
    forest: list[Any], *visitors: NodeVisitor, options: Optional[TraverserOptions] = None
) -> list[Any]:
    """Traverse a forest once with the given visitors.

    Parameters
    ----------
    forest : list
        Forest to traverse (mutated in place unless ``options.copy_forest``)
    *visitors : NodeVisitor
        Visitors, in chain order
    options : TraverserOptions, optional
        Engine options

    Returns
    -------
    list
        The resulting forest

    Examples
    --------
    >>> statements = transform_nodes(statements, ConstantFolder(), NopRemover())

    """
    traverser = NodeTraverser(options)
    for visitor in visitors:
        traverser.add_visitor(visitor)
    return traverser.traverse(forest)


def extract_nodes(forest: list[Any], node_type: NodeMatcher = None) -> list[Node]:
    """Extract all nodes matching a type or predicate from a forest.

    Parameters
    ----------
    forest : list
        Forest to search
    node_type : type, tuple of types, callable or None, default = None
        What to match (None for all nodes)

    Returns
    -------
    list of Node
        All matching nodes, in pre-order

    """
    collector = NodeCollector(predicate=_as_predicate(node_type))
    transform_nodes(forest, collector)
    return collector.collected


def find_first(forest: list[Any], node_type: NodeMatcher = None) -> Optional[Node]:
    """Find the first node, in pre-order, matching a type or predicate.

    Parameters
    ----------
    forest : list
        Forest to search
    node_type : type, tuple of types, callable or None, default = None
        What to match (None matches the first node)

    Returns
    -------
    Node or None
        The first match, or None

    """
    finder = FirstNodeFinder(_as_predicate(node_type))
    transform_nodes(forest, finder)
    return finder.found


def filter_nodes(forest: list[Any], predicate: NodePredicate) -> list[Any]:
    """Return a copy of a forest without the nodes that fail a predicate.

    The input forest is left untouched. A removed node takes its whole subtree
    with it; a removed node held in a single-node slot leaves that slot None.

    Parameters
    ----------
    forest : list
        Forest to filter
    predicate : callable
        Function that takes a node and returns True to keep it

    Returns
    -------
    list
        Filtered copy of the forest

    Examples
    --------
    >>> without_comments = filter_nodes(statements, lambda n: not isinstance(n, Comment))

    """
    remover = NodeRemover(lambda n: not predicate(n))
    options = TraverserOptions(single_slot_removal="clear", copy_forest=True)
    result = transform_nodes(forest, remover, options=options)
    logger.debug(f"filter_nodes removed {remover.removed} node(s)")
    return result


__all__ = [
    "NodePredicate",
    "NodeMatcher",
    "CallbackVisitor",
    "NodeCollector",
    "NodeTypeCollector",
    "FirstNodeFinder",
    "NodeRemover",
    "NodeReplacer",
    "clone_node",
    "clone_forest",
    "walk",
    "transform_nodes",
    "extract_nodes",
    "find_first",
    "filter_nodes",
]
