#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/astwalk/ast/nodes.py
"""Node abstraction for mutable abstract syntax trees.

This module defines the only capability the traversal engine requires of a
tree node: an ordered list of child slots, and in-place mutation of a slot by
index. It deliberately defines no node catalogue; language front-ends declare
their own node kinds as dataclasses deriving from :class:`Node`.

Slots
-----
Each slot value falls into exactly one of three kinds:

- ``SINGLE``: a single child :class:`Node`
- ``SEQUENCE``: a Python ``list`` whose items are nodes, nested lists (to any
  depth) or leaves
- ``LEAF``: any other value (strings, numbers, ``None``, ...), never traversed

Examples
--------
Declaring node kinds:

    >>> from dataclasses import dataclass, field
    >>> @dataclass
    ... class String(Node):
    ...     value: str
    >>> @dataclass
    ... class Echo(Node):
    ...     exprs: list[Node] = field(default_factory=list)
    >>> echo = Echo(exprs=[String("Foo"), String("Bar")])
    >>> echo.slot_names()
    ('exprs',)
    >>> [classify_slot(v) for v in echo.child_slots()]
    [<SlotKind.SEQUENCE: 'sequence'>]

"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Iterator, Optional

from astwalk.constants import SLOT_METADATA_KEY


class SlotKind(Enum):
    """Classification of a child slot value."""

    SINGLE = "single"
    SEQUENCE = "sequence"
    LEAF = "leaf"


@dataclass
class SourceLocation:
    """Source location information for AST nodes.

    Preserves information about where a node originated in the source text,
    useful for diagnostics. Attach it to a node through a non-slot field.

    Parameters
    ----------
    file : str or None, default = None
        Source file name
    line : int or None, default = None
        Line number in source text
    column : int or None, default = None
        Column number in source text
    end_line : int or None, default = None
        Line number where the node ends
    end_column : int or None, default = None
        Column number where the node ends

    """

    file: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    end_line: Optional[int] = None
    end_column: Optional[int] = None


def bookkeeping_field(**kwargs: Any) -> Any:
    """Declare a dataclass field that is not a child slot.

    Accepts the same keyword arguments as :func:`dataclasses.field`.

    Examples
    --------
    >>> @dataclass
    ... class Name(Node):
    ...     parts: list[str]
    ...     attributes: dict = bookkeeping_field(default_factory=dict)

    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[SLOT_METADATA_KEY] = False
    return field(metadata=metadata, **kwargs)


@lru_cache(maxsize=None)
def _dataclass_slot_names(node_class: type) -> tuple[str, ...]:
    if not is_dataclass(node_class):
        raise TypeError(
            f"{node_class.__name__} is not a dataclass; override slot_names() to declare its child slots"
        )
    return tuple(f.name for f in fields(node_class) if f.metadata.get(SLOT_METADATA_KEY, True))


class Node(ABC):
    """Base class for all AST nodes.

    Concrete node kinds are dataclasses. Every dataclass field is a child slot
    unless declared with :func:`bookkeeping_field`. Node kinds that are not
    dataclasses must override :meth:`slot_names`.

    The set and order of a node's slots is fixed for the node's lifetime;
    only slot values change, and only through :meth:`set_slot`.

    """

    @classmethod
    def slot_names(cls) -> tuple[str, ...]:
        """Return the attribute names of the child slots, in order.

        Returns
        -------
        tuple of str
            Slot attribute names

        Raises
        ------
        TypeError
            If the node class is not a dataclass and does not override this method

        """
        return _dataclass_slot_names(cls)

    def child_slots(self) -> list[Any]:
        """Return the current value of every child slot, in order.

        Returns
        -------
        list
            Slot values (nodes, lists or leaves)

        """
        return [getattr(self, name) for name in self.slot_names()]

    def set_slot(self, index: int, value: Any) -> None:
        """Replace the value of the slot at ``index`` in place.

        Parameters
        ----------
        index : int
            Slot position, as in :meth:`child_slots`
        value : Any
            New slot value

        Raises
        ------
        IndexError
            If ``index`` does not name a slot

        """
        names = self.slot_names()
        if not 0 <= index < len(names):
            raise IndexError(f"{type(self).__name__} has {len(names)} slot(s), got slot index {index}")
        setattr(self, names[index], value)


def classify_slot(value: Any) -> SlotKind:
    """Classify a slot value.

    Parameters
    ----------
    value : Any
        A slot value or sequence item

    Returns
    -------
    SlotKind
        ``SINGLE`` for nodes, ``SEQUENCE`` for lists, ``LEAF`` otherwise

    """
    if isinstance(value, Node):
        return SlotKind.SINGLE
    if isinstance(value, list):
        return SlotKind.SEQUENCE
    return SlotKind.LEAF


def get_child_slots(node: Node) -> list[Any]:
    """Return the child slot values of ``node``."""
    return node.child_slots()


def set_child_slot(node: Node, index: int, value: Any) -> None:
    """Set the child slot at ``index`` of ``node`` to ``value``."""
    node.set_slot(index, value)


def _iter_sequence_nodes(items: list[Any]) -> Iterator[Node]:
    for item in items:
        kind = classify_slot(item)
        if kind is SlotKind.SINGLE:
            yield item
        elif kind is SlotKind.SEQUENCE:
            yield from _iter_sequence_nodes(item)


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Iterate over the direct child nodes of ``node``.

    Nested lists are flattened transparently and leaves are skipped.

    Parameters
    ----------
    node : Node
        Parent node

    Yields
    ------
    Node
        Each direct child node, in slot order

    """
    for value in node.child_slots():
        kind = classify_slot(value)
        if kind is SlotKind.SINGLE:
            yield value
        elif kind is SlotKind.SEQUENCE:
            yield from _iter_sequence_nodes(value)


def get_node_children(node: Node) -> list[Node]:
    """Get all direct child nodes of a node as a flat list.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        Child nodes (empty list for nodes with only leaf slots)

    """
    return list(iter_child_nodes(node))
