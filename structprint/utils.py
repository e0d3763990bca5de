"""
Structprint utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import warnings
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(int)
        'int'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    return cls.__name__


def handle_error(exc: Exception, on_error: str, message: str) -> None:
    """
    Apply an on_error policy to an exception caught during introspection.

    "raise" re-raises exc, "warn" emits a RuntimeWarning, anything else is silent.
    The caller continues with its fallback unless exc was re-raised.
    """
    if on_error == "raise":
        raise exc
    if on_error == "warn":
        warnings.warn(f"{message}: {type(exc).__name__}: {exc}", RuntimeWarning, stacklevel=3)


def hex_id(obj: Any) -> str:
    """
    Identity token of an object as a lowercase hex string.

    The token identifies the instance, not its value: two equal objects yield
    different tokens, the same object always yields the same token while alive.

    Examples:
        >>> a = []
        >>> hex_id(a) == hex_id(a)
        True
    """
    return format(id(obj), "x")
