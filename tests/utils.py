"""Test utilities for the astwalk test suite.

This module provides a small node catalogue shaped like a scripting-language
front-end, a scripted visitor that records every hook call, and helpers for
building forests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from astwalk.ast import KEEP, Node, NodeVisitor, SourceLocation, bookkeeping_field


@dataclass
class String(Node):
    """String literal; its only slot is a leaf."""

    value: str


@dataclass
class Num(Node):
    value: int


@dataclass
class Name(Node):
    parts: list[str] = field(default_factory=list)
    source_location: Optional[SourceLocation] = bookkeeping_field(default=None)


@dataclass
class Echo(Node):
    exprs: list[Any] = field(default_factory=list)


@dataclass
class Print(Node):
    expr: Optional[Node] = None


@dataclass
class Arg(Node):
    value: Optional[Node] = None
    by_ref: bool = False


@dataclass
class FuncCall(Node):
    name: Optional[Node] = None
    args: list[Any] = field(default_factory=list)


@dataclass
class Add(Node):
    left: Optional[Node] = None
    right: Optional[Node] = None


@dataclass
class Nop(Node):
    comment: str = ""


@dataclass
class Block(Node):
    stmts: list[Any] = field(default_factory=list)
    attributes: dict[str, Any] = bookkeeping_field(default_factory=dict)


class ScriptedVisitor(NodeVisitor):
    """Visitor that records every hook call and replays scripted actions.

    Parameters
    ----------
    name : str
        Label written to the log with every call
    log : list
        Shared call log; entries are ``(name, hook, value)`` tuples. Forests
        are logged as shallow copies since the engine splices lists in place.
    script : dict, optional
        Maps a hook name to the actions returned by its successive calls.
        Once a hook's actions are used up it returns KEEP.

    """

    def __init__(self, name: str, log: list[tuple[str, str, Any]], script: Optional[dict[str, list[Any]]] = None):
        self.name = name
        self.log = log
        self.script = {hook: list(actions) for hook, actions in (script or {}).items()}

    def _respond(self, hook: str, value: Any) -> Any:
        self.log.append((self.name, hook, value))
        pending = self.script.get(hook)
        if pending:
            return pending.pop(0)
        return KEEP

    def before_traverse(self, forest):
        return self._respond("before_traverse", list(forest))

    def enter_node(self, node):
        return self._respond("enter_node", node)

    def leave_node(self, node):
        return self._respond("leave_node", node)

    def after_traverse(self, forest):
        return self._respond("after_traverse", list(forest))


def calls(log: list[tuple[str, str, Any]], name: Optional[str] = None) -> list[tuple[str, Any]]:
    """Return ``(hook, value)`` pairs from a call log, optionally for one visitor."""
    return [(hook, value) for who, hook, value in log if name is None or who == name]


def node_calls(log: list[tuple[str, str, Any]], name: Optional[str] = None) -> list[tuple[str, Any]]:
    """Like :func:`calls` but without the forest-level hooks."""
    return [(hook, value) for hook, value in calls(log, name) if hook in ("enter_node", "leave_node")]


def left_nested_chain(depth: int) -> Add:
    """Build ``((0 + 1) + 2) + ...`` with ``depth`` levels of node nesting."""
    node: Node = Num(0)
    for i in range(1, depth):
        node = Add(left=node, right=Num(i))
    return node
