#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/astwalk/ast/actions.py
"""Actions returned by visitor hooks.

Each hook communicates its intent to the traversal engine with one value from
a small closed set instead of overloading a single return channel:

==================  ===========================================================
Hook                Allowed actions
==================  ===========================================================
before_traverse     ``KEEP``, ``ReplaceForest(forest)``
enter_node          ``KEEP``, ``ReplaceNode(node)``, ``SKIP_CHILDREN``
leave_node          ``KEEP``, ``ReplaceNode(node)``, ``REMOVE_NODE``,
                    ``SpliceNodes(nodes)``
after_traverse      ``KEEP``, ``ReplaceForest(forest)``
==================  ===========================================================

``None`` is accepted anywhere as an alias for ``KEEP``.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from astwalk.ast.nodes import Node
from astwalk.constants import (
    HOOK_AFTER_TRAVERSE,
    HOOK_BEFORE_TRAVERSE,
    HOOK_ENTER_NODE,
    HOOK_LEAVE_NODE,
    HookName,
)
from astwalk.exceptions import InvalidVisitorActionError, ValidationError


@dataclass(frozen=True)
class Keep:
    """Leave the current value unchanged."""

    def __repr__(self) -> str:
        return "KEEP"


@dataclass(frozen=True)
class SkipChildren:
    """Do not descend into the children of the node being entered."""

    def __repr__(self) -> str:
        return "SKIP_CHILDREN"


@dataclass(frozen=True)
class RemoveNode:
    """Delete the node being left from its enclosing list."""

    def __repr__(self) -> str:
        return "REMOVE_NODE"


@dataclass(frozen=True)
class ReplaceNode:
    """Replace the current node with ``node``.

    Parameters
    ----------
    node : Node
        The replacement node

    Raises
    ------
    ValidationError
        If ``node`` is not a Node instance

    """

    node: Node

    def __post_init__(self) -> None:
        if not isinstance(self.node, Node):
            raise ValidationError(
                f"ReplaceNode requires a Node, got {type(self.node).__name__}",
                parameter_name="node",
                parameter_value=self.node,
            )


@dataclass(frozen=True)
class SpliceNodes:
    """Replace the node being left with zero or more nodes in its enclosing list.

    The spliced nodes are not entered or left during the current pass.

    Parameters
    ----------
    nodes : iterable of Node
        Nodes to put in the place of the current node, in order

    Raises
    ------
    ValidationError
        If any item is not a Node instance

    """

    nodes: Iterable[Node] = ()

    def __post_init__(self) -> None:
        materialized: tuple[Node, ...] = tuple(self.nodes)
        for item in materialized:
            if not isinstance(item, Node):
                raise ValidationError(
                    f"SpliceNodes items must be Node instances, got {type(item).__name__}",
                    parameter_name="nodes",
                    parameter_value=item,
                )
        object.__setattr__(self, "nodes", materialized)


@dataclass(frozen=True)
class ReplaceForest:
    """Replace the whole forest being traversed.

    Parameters
    ----------
    forest : list
        The replacement forest

    Raises
    ------
    ValidationError
        If ``forest`` is not a list

    """

    forest: list[Any]

    def __post_init__(self) -> None:
        if not isinstance(self.forest, list):
            raise ValidationError(
                f"ReplaceForest requires a list, got {type(self.forest).__name__}",
                parameter_name="forest",
                parameter_value=self.forest,
            )


KEEP = Keep()
SKIP_CHILDREN = SkipChildren()
REMOVE_NODE = RemoveNode()

ForestAction = Union[Keep, ReplaceForest]
EnterAction = Union[Keep, ReplaceNode, SkipChildren]
LeaveAction = Union[Keep, ReplaceNode, RemoveNode, SpliceNodes]
VisitorAction = Union[Keep, ReplaceNode, SkipChildren, RemoveNode, SpliceNodes, ReplaceForest]

ALLOWED_ACTIONS: dict[str, tuple[type, ...]] = {
    HOOK_BEFORE_TRAVERSE: (Keep, ReplaceForest),
    HOOK_ENTER_NODE: (Keep, ReplaceNode, SkipChildren),
    HOOK_LEAVE_NODE: (Keep, ReplaceNode, RemoveNode, SpliceNodes),
    HOOK_AFTER_TRAVERSE: (Keep, ReplaceForest),
}


def validate_action(hook: HookName, action: Any, visitor: Optional[Any] = None) -> VisitorAction:
    """Normalise and validate a hook's return value.

    Parameters
    ----------
    hook : HookName
        Name of the hook that produced ``action``
    action : Any
        The hook's return value
    visitor : object, optional
        The visitor that produced it, for error reporting

    Returns
    -------
    VisitorAction
        ``KEEP`` for ``None``, otherwise ``action`` itself

    Raises
    ------
    InvalidVisitorActionError
        If ``action`` is not one of the actions allowed for ``hook``

    Examples
    --------
    >>> validate_action("enter_node", None)
    KEEP
    >>> validate_action("before_traverse", SKIP_CHILDREN)
    Traceback (most recent call last):
    ...
    astwalk.exceptions.InvalidVisitorActionError: Invalid action SKIP_CHILDREN returned by before_traverse()

    """
    if action is None:
        return KEEP

    allowed = ALLOWED_ACTIONS.get(hook)
    if allowed is None:
        raise ValueError(f"Unknown hook name: {hook!r}")

    if not isinstance(action, allowed):
        raise InvalidVisitorActionError(hook, action, visitor=visitor)

    return action


__all__ = [
    "Keep",
    "SkipChildren",
    "RemoveNode",
    "ReplaceNode",
    "SpliceNodes",
    "ReplaceForest",
    "KEEP",
    "SKIP_CHILDREN",
    "REMOVE_NODE",
    "ForestAction",
    "EnterAction",
    "LeaveAction",
    "VisitorAction",
    "ALLOWED_ACTIONS",
    "validate_action",
]
