#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the traversal engine.

Options are immutable; use :meth:`CloneFrozenMixin.create_updated` to derive
a modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from astwalk.constants import (
    DEFAULT_COPY_FOREST,
    DEFAULT_LOG_ACTIONS,
    DEFAULT_MAX_DEPTH,
    DEFAULT_SINGLE_SLOT_REMOVAL,
    SINGLE_SLOT_REMOVAL_MODES,
    SingleSlotRemovalMode,
)
from astwalk.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class TraverserOptions(CloneFrozenMixin):
    """Options controlling a :class:`~astwalk.ast.traverser.NodeTraverser`.

    Parameters
    ----------
    single_slot_removal : {"error", "clear"}, default="error"
        What ``REMOVE_NODE`` does for a node held in a single-node slot.
        ``"error"`` raises InvalidVisitorActionError; ``"clear"`` sets the
        slot to None.
    max_depth : int or None, default=None
        Maximum node nesting depth. Exceeding it raises TraversalDepthError.
        None means unlimited, in which case a cyclic node graph is walked
        until memory runs out.
    copy_forest : bool, default=False
        Deep-copy the forest before the first hook runs, so the caller's
        tree is never mutated, even when a visitor fails midway. The copy is
        made with :func:`copy.deepcopy`, which is bounded by Python's recursion
        limit on very deep trees.
    log_actions : bool, default=False
        Log every non-keep action at DEBUG level.

    Examples
    --------
    >>> options = TraverserOptions(single_slot_removal="clear")
    >>> guarded = options.create_updated(max_depth=500)

    """

    single_slot_removal: SingleSlotRemovalMode = field(
        default=DEFAULT_SINGLE_SLOT_REMOVAL,
        metadata={"help": "Behaviour of REMOVE_NODE in a single-node slot: 'error' or 'clear'"},
    )
    max_depth: Optional[int] = field(
        default=DEFAULT_MAX_DEPTH,
        metadata={"help": "Maximum node nesting depth (None for unlimited)"},
    )
    copy_forest: bool = field(
        default=DEFAULT_COPY_FOREST,
        metadata={"help": "Deep-copy the forest before traversal so the input is never mutated"},
    )
    log_actions: bool = field(
        default=DEFAULT_LOG_ACTIONS,
        metadata={"help": "Log every non-keep visitor action at DEBUG level"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        if self.single_slot_removal not in SINGLE_SLOT_REMOVAL_MODES:
            raise ValidationError(
                f"single_slot_removal must be one of {SINGLE_SLOT_REMOVAL_MODES}, got {self.single_slot_removal!r}",
                parameter_name="single_slot_removal",
                parameter_value=self.single_slot_removal,
            )

        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise ValidationError(
                    f"max_depth must be an integer or None, got {type(self.max_depth).__name__}",
                    parameter_name="max_depth",
                    parameter_value=self.max_depth,
                )
            if self.max_depth <= 0:
                raise ValidationError(
                    f"max_depth must be positive, got {self.max_depth}",
                    parameter_name="max_depth",
                    parameter_value=self.max_depth,
                )

        for flag in ("copy_forest", "log_actions"):
            value = getattr(self, flag)
            if not isinstance(value, bool):
                raise ValidationError(
                    f"{flag} must be a boolean, got {type(value).__name__}",
                    parameter_name=flag,
                    parameter_value=value,
                )

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Return the names of all option fields."""
        return tuple(f.name for f in fields(cls))
