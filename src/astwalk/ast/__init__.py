#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/astwalk/ast/__init__.py
"""Tree-traversal core for mutable abstract syntax trees.

The module consists of several components:

- nodes: the Node abstraction (ordered child slots, in-place slot mutation)
- actions: the values visitor hooks return to request structural edits
- visitors: the four-hook visitor contract
- traverser: the engine that walks a forest through a chain of visitors
- transforms: ready-made visitors and one-shot helpers

Examples
--------
Basic usage:

    >>> from astwalk.ast import NodeTraverser, NodeVisitor, REMOVE_NODE
    >>>
    >>> class NopRemover(NodeVisitor):
    ...     def leave_node(self, node):
    ...         if isinstance(node, Nop):
    ...             return REMOVE_NODE
    >>>
    >>> traverser = NodeTraverser()
    >>> traverser.add_visitor(NopRemover())
    >>> statements = traverser.traverse(statements)

"""

from __future__ import annotations

from astwalk.ast.actions import (
    KEEP,
    REMOVE_NODE,
    SKIP_CHILDREN,
    EnterAction,
    ForestAction,
    Keep,
    LeaveAction,
    RemoveNode,
    ReplaceForest,
    ReplaceNode,
    SkipChildren,
    SpliceNodes,
    VisitorAction,
    validate_action,
)
from astwalk.ast.nodes import (
    Node,
    SlotKind,
    SourceLocation,
    bookkeeping_field,
    classify_slot,
    get_child_slots,
    get_node_children,
    iter_child_nodes,
    set_child_slot,
)
from astwalk.ast.transforms import (
    CallbackVisitor,
    FirstNodeFinder,
    NodeCollector,
    NodeRemover,
    NodeReplacer,
    NodeTypeCollector,
    clone_forest,
    clone_node,
    extract_nodes,
    filter_nodes,
    find_first,
    transform_nodes,
    walk,
)
from astwalk.ast.traverser import NodeTraverser
from astwalk.ast.visitors import NodeVisitor

__all__ = [
    # Nodes
    "Node",
    "SlotKind",
    "SourceLocation",
    "bookkeeping_field",
    "classify_slot",
    "get_child_slots",
    "set_child_slot",
    "iter_child_nodes",
    "get_node_children",
    # Actions
    "Keep",
    "SkipChildren",
    "RemoveNode",
    "ReplaceNode",
    "SpliceNodes",
    "ReplaceForest",
    "KEEP",
    "SKIP_CHILDREN",
    "REMOVE_NODE",
    "EnterAction",
    "LeaveAction",
    "ForestAction",
    "VisitorAction",
    "validate_action",
    # Visitors and engine
    "NodeVisitor",
    "NodeTraverser",
    # Transforms
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
