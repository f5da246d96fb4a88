#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the astwalk library.

This module defines specialized exception classes for the error conditions
the traversal engine itself can detect. Exceptions raised by visitor hooks
are never wrapped: they propagate to the caller unchanged.

Exception Hierarchy
-------------------
- AstWalkError (base exception)

  - ValidationError (parameter/option validation)
    - ConfigurationError (config file discovery and loading)

  - TraversalError (faults detected while walking a forest)
    - InvalidVisitorActionError (hook returned an action outside its allowed set)
    - TraversalDepthError (configured depth limit exceeded)

"""

from typing import Any


class AstWalkError(Exception):
    """Base exception class for all astwalk-specific errors.

    Catching this will catch all library-specific errors, but never an
    exception raised from inside a visitor hook.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(AstWalkError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConfigurationError(ValidationError):
    """Exception raised when a configuration file cannot be found, read or applied.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The underlying parse or I/O error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, parameter_name="config_path", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class TraversalError(AstWalkError):
    """Base exception for faults detected by the traversal engine.

    Parameters
    ----------
    message : str
        Description of the fault
    hook_name : str, optional
        Hook that was running when the fault was detected
    original_error : Exception, optional
        The underlying exception, if any

    Attributes
    ----------
    hook_name : str or None
        Name of the hook (``"enter_node"``, ``"leave_node"``, ...)

    """

    def __init__(self, message: str, hook_name: str | None = None, original_error: Exception | None = None):
        """Initialize the traversal error."""
        super().__init__(message, original_error)
        self.hook_name = hook_name


class InvalidVisitorActionError(TraversalError):
    """Exception raised when a visitor returns an action its hook does not allow.

    This is a programming error in the visitor, distinct from malformed tree
    shapes. It is also raised when an otherwise valid action cannot be applied
    where the node lives, e.g. a splice requested for a node held in a
    single-node slot.

    Parameters
    ----------
    hook_name : str
        Hook that produced the action
    action : any
        The rejected return value
    visitor : object, optional
        The visitor that returned it
    message : str, optional
        Custom error message. If not provided, one is generated

    Attributes
    ----------
    action : any
        The rejected return value
    visitor : object or None
        The offending visitor

    """

    def __init__(self, hook_name: str, action: Any, visitor: Any = None, message: str | None = None):
        """Initialize the invalid action error."""
        if message is None:
            owner = f" from {type(visitor).__name__}" if visitor is not None else ""
            message = f"Invalid action {action!r} returned by {hook_name}(){owner}"
        super().__init__(message, hook_name=hook_name)
        self.action = action
        self.visitor = visitor


class TraversalDepthError(TraversalError):
    """Exception raised when node nesting exceeds the configured ``max_depth``.

    Parameters
    ----------
    max_depth : int
        The configured limit that was exceeded

    """

    def __init__(self, max_depth: int):
        """Initialize the depth error."""
        super().__init__(f"Traversal exceeded maximum node depth of {max_depth}", hook_name=None)
        self.max_depth = max_depth
