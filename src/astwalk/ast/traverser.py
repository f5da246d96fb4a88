#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/astwalk/ast/traverser.py
"""Depth-first traversal engine driving a chain of visitors.

The :class:`NodeTraverser` walks a forest (a list of nodes, possibly with
nested lists), calls every registered visitor's hooks on entry and exit of
each node, and applies the structural edits the visitors request.

Chaining
--------
For every single event (entering node N, leaving node N, before or after the
whole forest) visitors run strictly in registration order, and the value
committed by visitor *i* is the input seen by visitor *i + 1*. The value
after the last visitor is what the engine commits.

Two leave actions end the chain early because no node remains to hand on:
``REMOVE_NODE`` and ``SpliceNodes``. ``SKIP_CHILDREN`` does not end the enter
chain; later visitors are still called with the current node.

List editing
------------
Removals and splices are recorded while a list is walked and applied in
reverse index order once the walk over that list finishes. Iteration therefore
always continues with the next original element, and spliced nodes are never
entered or left during the pass that produced them.

Depth
-----
The walk keeps its own frame stack instead of recursing, so tree depth is
bounded by memory, not by Python's recursion limit. Cycles are not detected;
set ``TraverserOptions(max_depth=...)`` when the input may contain one.

Failure
-------
Exceptions raised by visitors propagate unchanged. The forest is left in an
undefined, partially mutated state; use ``TraverserOptions(copy_forest=True)``
or snapshot the forest beforehand when atomicity matters.

Examples
--------
    >>> traverser = NodeTraverser()
    >>> traverser.add_visitor(ConstantFolder())
    >>> traverser.add_visitor(NopRemover())
    >>> statements = traverser.traverse(statements)

"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from astwalk.ast.actions import (
    KEEP,
    Keep,
    RemoveNode,
    ReplaceForest,
    ReplaceNode,
    SkipChildren,
    SpliceNodes,
    VisitorAction,
    validate_action,
)
from astwalk.ast.nodes import Node, SlotKind, classify_slot
from astwalk.ast.visitors import NodeVisitor
from astwalk.constants import (
    HOOK_AFTER_TRAVERSE,
    HOOK_BEFORE_TRAVERSE,
    HOOK_ENTER_NODE,
    HOOK_LEAVE_NODE,
    HookName,
)
from astwalk.exceptions import InvalidVisitorActionError, TraversalDepthError, ValidationError
from astwalk.options import TraverserOptions

logger = logging.getLogger(__name__)

# What the leave chain commits for one node
_LeaveOutcome = Union[Node, RemoveNode, SpliceNodes]


class NodeTraverser:
    """Traverse forests with an ordered chain of visitors.

    The traverser holds the ordered visitor registry and is otherwise
    stateless between calls; each :meth:`traverse` call is independent.

    Parameters
    ----------
    options : TraverserOptions, optional
        Engine options. Defaults to ``TraverserOptions()``.

    Notes
    -----
    The registry is keyed by registration index. Removing a visitor leaves a
    gap in the indices of the remaining ones rather than renumbering them.

    Thread Safety
    -------------
    NodeTraverser instances are NOT thread-safe. Traversal is synchronous and
    single-threaded; share an instance across threads only with external
    locking.

    """

    def __init__(self, options: Optional[TraverserOptions] = None) -> None:
        """Initialize an empty traverser."""
        self.options = options or TraverserOptions()
        self._visitors: dict[int, NodeVisitor] = {}
        self._next_index = 0

    # ------------------------------------------------------------------
    # Visitor registry
    # ------------------------------------------------------------------

    def add_visitor(self, visitor: NodeVisitor) -> None:
        """Append a visitor to the chain.

        Duplicates are allowed; a visitor registered twice runs twice per event.

        Parameters
        ----------
        visitor : NodeVisitor
            Visitor to register

        """
        self._visitors[self._next_index] = visitor
        logger.debug(f"Registered visitor {type(visitor).__name__} at index {self._next_index}")
        self._next_index += 1

    def remove_visitor(self, visitor: NodeVisitor) -> bool:
        """Remove the first registered occurrence of ``visitor``.

        Matching is by identity. Removing a visitor that is not registered is
        a no-op.

        Parameters
        ----------
        visitor : NodeVisitor
            Visitor to unregister

        Returns
        -------
        bool
            True if a visitor was removed

        """
        for index, registered in self._visitors.items():
            if registered is visitor:
                del self._visitors[index]
                logger.debug(f"Removed visitor {type(visitor).__name__} from index {index}")
                return True

        return False

    @property
    def visitors(self) -> tuple[NodeVisitor, ...]:
        """Registered visitors in chain order."""
        return tuple(self._visitors.values())

    def list_visitors(self) -> dict[int, NodeVisitor]:
        """Return the registry keyed by registration index.

        Returns
        -------
        dict[int, NodeVisitor]
            Shallow copy of the internal registry

        Examples
        --------
        >>> traverser = NodeTraverser()
        >>> for v in (v1, v2, v3):
        ...     traverser.add_visitor(v)
        >>> traverser.remove_visitor(v2)
        True
        >>> sorted(traverser.list_visitors())
        [0, 2]

        """
        return dict(self._visitors)

    def clear(self) -> None:
        """Unregister all visitors and restart registration indices."""
        self._visitors.clear()
        self._next_index = 0
        logger.debug("Cleared all visitors")

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def traverse(self, forest: list[Any]) -> list[Any]:
        """Traverse ``forest`` with every registered visitor.

        Parameters
        ----------
        forest : list
            Top-level sequence of nodes (nested lists allowed)

        Returns
        -------
        list
            The resulting forest, as committed by the ``after_traverse`` chain

        Raises
        ------
        ValidationError
            If ``forest`` is not a list
        InvalidVisitorActionError
            If a visitor returns an action its hook does not allow, or one that
            cannot be applied where the node lives
        TraversalDepthError
            If ``options.max_depth`` is exceeded

        """
        if not isinstance(forest, list):
            raise ValidationError(
                f"Forest must be a list, got {type(forest).__name__}",
                parameter_name="forest",
                parameter_value=forest,
            )

        # Registry changes made by visitors take effect on the next call
        visitors = self.visitors
        logger.debug(f"Traversing forest of {len(forest)} item(s) with {len(visitors)} visitor(s)")

        if self.options.copy_forest:
            forest = copy.deepcopy(forest)

        forest = self._run_forest_chain(HOOK_BEFORE_TRAVERSE, visitors, forest)
        forest = self._walk(forest, visitors)
        forest = self._run_forest_chain(HOOK_AFTER_TRAVERSE, visitors, forest)

        logger.debug(f"Traversal finished with {len(forest)} top-level item(s)")
        return forest

    def _call_hook(self, visitor: NodeVisitor, hook: HookName, value: Any) -> VisitorAction:
        method = getattr(visitor, hook, None)
        if method is None:
            return KEEP

        try:
            result = method(value)
        except Exception as e:
            logger.debug(f"{type(visitor).__name__}.{hook}() raised {type(e).__name__}; aborting traversal")
            raise

        action = validate_action(hook, result, visitor)
        if self.options.log_actions and not isinstance(action, Keep):
            logger.debug(f"{type(visitor).__name__}.{hook}() on {_describe(value)} returned {action!r}")
        return action

    def _run_forest_chain(self, hook: HookName, visitors: tuple[NodeVisitor, ...], forest: list[Any]) -> list[Any]:
        for visitor in visitors:
            action = self._call_hook(visitor, hook, forest)
            if isinstance(action, ReplaceForest):
                forest = action.forest
        return forest

    def _walk(self, forest: list[Any], visitors: tuple[NodeVisitor, ...]) -> list[Any]:
        """Drive the depth-first walk on an explicit frame stack.

        The top frame is stepped until it either opens a child frame, which is
        pushed, or finishes, in which case it is popped and its parent picks up
        the result on its next step. Python stack usage does not grow with the
        depth of the tree.
        """
        root = _SequenceFrame(forest, depth=1)
        stack: list[_Frame] = [root]

        while stack:
            frame = stack[-1]
            if isinstance(frame, _SequenceFrame):
                child = self._step_sequence(frame, visitors)
            else:
                child = self._step_node(frame, visitors)

            if child is None:
                stack.pop()
            else:
                stack.append(child)

        return root.items

    def _step_sequence(self, frame: _SequenceFrame, visitors: tuple[NodeVisitor, ...]) -> Optional[_Frame]:
        """Advance a list to its next node or nested list, applying edits when it is exhausted."""
        if frame.waiting is not None:
            self._commit_sequence_item(frame, frame.waiting)
            frame.waiting = None
            frame.index += 1

        items = frame.items
        while frame.index < len(items):
            item = items[frame.index]
            kind = classify_slot(item)
            if kind is SlotKind.SEQUENCE:
                frame.waiting = _SequenceFrame(item, frame.depth)
                return frame.waiting
            if kind is SlotKind.SINGLE:
                frame.waiting = self._enter_node(item, visitors, frame.depth)
                return frame.waiting
            frame.index += 1

        for index, replacement in reversed(frame.edits):
            items[index : index + 1] = replacement

        return None

    def _commit_sequence_item(self, frame: _SequenceFrame, child: _Frame) -> None:
        if isinstance(child, _SequenceFrame):
            frame.items[frame.index] = child.items
            return

        outcome = child.outcome
        if isinstance(outcome, RemoveNode):
            frame.edits.append((frame.index, []))
        elif isinstance(outcome, SpliceNodes):
            frame.edits.append((frame.index, list(outcome.nodes)))
        else:
            frame.items[frame.index] = outcome

    def _enter_node(self, node: Node, visitors: tuple[NodeVisitor, ...], depth: int) -> _NodeFrame:
        """Run the enter chain for ``node`` and open a frame over the committed node."""
        max_depth = self.options.max_depth
        if max_depth is not None and depth > max_depth:
            raise TraversalDepthError(max_depth)

        skip_children = False
        for visitor in visitors:
            action = self._call_hook(visitor, HOOK_ENTER_NODE, node)
            if isinstance(action, SkipChildren):
                skip_children = True
            elif isinstance(action, ReplaceNode):
                node = action.node

        slots = [] if skip_children else node.child_slots()
        return _NodeFrame(node, depth=depth, slots=slots)

    def _step_node(self, frame: _NodeFrame, visitors: tuple[NodeVisitor, ...]) -> Optional[_Frame]:
        """Advance a node to its next child slot, running the leave chain once all slots are done."""
        node = frame.node
        if frame.waiting is not None:
            child = frame.waiting
            frame.waiting = None
            if isinstance(child, _SequenceFrame):
                node.set_slot(frame.slot_index, child.items)
            else:
                node.set_slot(frame.slot_index, self._single_slot_value(child))
            frame.slot_index += 1

        while frame.slot_index < len(frame.slots):
            value = frame.slots[frame.slot_index]
            kind = classify_slot(value)
            if kind is SlotKind.SEQUENCE:
                frame.waiting = _SequenceFrame(value, frame.depth + 1)
                return frame.waiting
            if kind is SlotKind.SINGLE:
                frame.waiting = self._enter_node(value, visitors, frame.depth + 1)
                return frame.waiting
            frame.slot_index += 1

        for visitor in visitors:
            action = self._call_hook(visitor, HOOK_LEAVE_NODE, node)
            if isinstance(action, ReplaceNode):
                node = action.node
            elif isinstance(action, (RemoveNode, SpliceNodes)):
                frame.outcome = action
                frame.edited_by = visitor
                return None

        frame.outcome = node
        return None

    def _single_slot_value(self, child: _NodeFrame) -> Optional[Node]:
        """Turn the leave outcome of a node held in a single-node slot into the new slot value."""
        outcome = child.outcome
        visitor = child.edited_by

        if isinstance(outcome, RemoveNode):
            if self.options.single_slot_removal == "clear":
                return None
            raise InvalidVisitorActionError(
                HOOK_LEAVE_NODE,
                outcome,
                visitor=visitor,
                message=(
                    f"{type(visitor).__name__}.leave_node() returned REMOVE_NODE for {_describe(child.node)}, "
                    "which is held in a single-node slot; set single_slot_removal='clear' to allow it"
                ),
            )

        if isinstance(outcome, SpliceNodes):
            raise InvalidVisitorActionError(
                HOOK_LEAVE_NODE,
                outcome,
                visitor=visitor,
                message=(
                    f"{type(visitor).__name__}.leave_node() returned {outcome!r} for {_describe(child.node)}, "
                    "which is held in a single-node slot; splicing requires an enclosing list"
                ),
            )

        return outcome


@dataclass
class _SequenceFrame:
    """A list being walked; ``edits`` collects removals and splices by index."""

    items: list[Any]
    depth: int
    index: int = 0
    edits: list[tuple[int, list[Node]]] = field(default_factory=list)
    waiting: Optional[_Frame] = None


@dataclass
class _NodeFrame:
    """A node whose enter chain has run; ``outcome`` is set by its leave chain."""

    node: Node
    depth: int
    slots: list[Any]
    slot_index: int = 0
    waiting: Optional[_Frame] = None
    outcome: Optional[_LeaveOutcome] = None
    edited_by: Optional[NodeVisitor] = None


_Frame = Union[_SequenceFrame, _NodeFrame]


def _describe(value: Any) -> str:
    if isinstance(value, list):
        return f"forest of {len(value)} item(s)"
    return type(value).__name__


__all__ = ["NodeTraverser"]
