"""astwalk - a visitor-driven traversal engine for mutable abstract syntax trees.

Given a forest (an ordered list of tree nodes) and an ordered chain of
visitors, astwalk walks the forest depth-first, invokes each visitor's hooks
on node entry and exit, and applies the structural edits the visitors request:
replacing, removing or splicing nodes, or skipping a subtree.

astwalk does not parse source text and defines no node catalogue. Language
front-ends declare their node kinds as dataclasses deriving from
:class:`~astwalk.ast.nodes.Node` and attach their passes as visitors.

Key Features
------------
- Four-hook visitor contract with explicit, validated action values
- Well-defined effect order when several visitors are chained
- In-place list splicing with stable iteration
- Ready-made collecting, finding, removing and replacing visitors
- Options loadable from TOML, YAML, JSON or pyproject.toml

Requirements
------------
- Python 3.10+

Examples
--------
Fold additions of two numbers and drop no-op statements in one pass:

    >>> from astwalk import NodeTraverser, NodeVisitor, REMOVE_NODE, ReplaceNode
    >>>
    >>> class ConstantFolder(NodeVisitor):
    ...     def leave_node(self, node):
    ...         if isinstance(node, Add) and isinstance(node.left, Num) and isinstance(node.right, Num):
    ...             return ReplaceNode(Num(node.left.value + node.right.value))
    >>>
    >>> class NopRemover(NodeVisitor):
    ...     def leave_node(self, node):
    ...         if isinstance(node, Nop):
    ...             return REMOVE_NODE
    >>>
    >>> traverser = NodeTraverser()
    >>> traverser.add_visitor(ConstantFolder())
    >>> traverser.add_visitor(NopRemover())
    >>> statements = traverser.traverse(statements)

"""

__version__ = "0.1.0"

from astwalk.ast import (
    KEEP,
    REMOVE_NODE,
    SKIP_CHILDREN,
    CallbackVisitor,
    Keep,
    Node,
    NodeTraverser,
    NodeVisitor,
    RemoveNode,
    ReplaceForest,
    ReplaceNode,
    SkipChildren,
    SlotKind,
    SourceLocation,
    SpliceNodes,
    bookkeeping_field,
)
from astwalk.config import load_options
from astwalk.exceptions import (
    AstWalkError,
    ConfigurationError,
    InvalidVisitorActionError,
    TraversalDepthError,
    TraversalError,
    ValidationError,
)
from astwalk.options import TraverserOptions

__all__ = [
    "__version__",
    # Core
    "Node",
    "SlotKind",
    "SourceLocation",
    "bookkeeping_field",
    "NodeVisitor",
    "NodeTraverser",
    "CallbackVisitor",
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
    # Options
    "TraverserOptions",
    "load_options",
    # Exceptions
    "AstWalkError",
    "ValidationError",
    "ConfigurationError",
    "TraversalError",
    "InvalidVisitorActionError",
    "TraversalDepthError",
]
