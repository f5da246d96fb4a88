#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the astwalk library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Hook Names - The four visitor hook identifiers
3. Traversal Defaults - Default values for TraverserOptions
4. Configuration Discovery - File names and environment variables
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HookName = Literal["before_traverse", "enter_node", "leave_node", "after_traverse"]
SingleSlotRemovalMode = Literal["error", "clear"]

# =============================================================================
# Hook Names
# =============================================================================

HOOK_BEFORE_TRAVERSE: HookName = "before_traverse"
HOOK_ENTER_NODE: HookName = "enter_node"
HOOK_LEAVE_NODE: HookName = "leave_node"
HOOK_AFTER_TRAVERSE: HookName = "after_traverse"

HOOK_NAMES: tuple[HookName, ...] = (
    HOOK_BEFORE_TRAVERSE,
    HOOK_ENTER_NODE,
    HOOK_LEAVE_NODE,
    HOOK_AFTER_TRAVERSE,
)

# Dataclass field metadata key marking a field as bookkeeping rather than a child slot
SLOT_METADATA_KEY = "slot"

# =============================================================================
# Traversal Defaults
# =============================================================================

SINGLE_SLOT_REMOVAL_MODES: tuple[SingleSlotRemovalMode, ...] = ("error", "clear")
DEFAULT_SINGLE_SLOT_REMOVAL: SingleSlotRemovalMode = "error"
DEFAULT_MAX_DEPTH: int | None = None
DEFAULT_COPY_FOREST = False
DEFAULT_LOG_ACTIONS = False

# =============================================================================
# Configuration Discovery
# =============================================================================

CONFIG_ENV_VAR = "ASTWALK_CONFIG"
PYPROJECT_TOOL_SECTION = "astwalk"
TRAVERSER_CONFIG_SECTION = "traverser"
CONFIG_FILENAMES = [".astwalk.toml", ".astwalk.yaml", ".astwalk.yml", ".astwalk.json", "pyproject.toml"]
