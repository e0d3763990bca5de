"""
Leaf value formatters.

Renders primitives (None, booleans, numbers, strings and byte strings) to their
literal text, plus a couple of robust helpers for opaque values and error messages.
All formatters are total: they never raise, a broken __repr__ included.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import numbers
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name

PRIMITIVE_TYPES = (
    type(None),
    bool,  # Comes before numbers (is subclass of int)
    numbers.Number,
    str,
    bytes,
    bytearray,
)

# Order matters: backslash must be escaped first
_STR_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\r", "\\r"),
    ("\n", "\\n"),
)


# Methods --------------------------------------------------------------------------------------------------------------


def fmt_leaf(obj: Any) -> str:
    """
    Format a primitive value as its literal text.

    Rules:
        - None → null
        - bool → True / False
        - str → double-quoted, only backslash, double quote, CR and LF escaped
        - bytes, bytearray → Python repr
        - numbers → natural str() form

    Non-primitive input falls back to `fmt_opaque`.

    Examples:
        >>> fmt_leaf(None)
        'null'
        >>> fmt_leaf(False)
        'False'
        >>> fmt_leaf("hi")
        '"hi"'
        >>> fmt_leaf(2.5)
        '2.5'
    """
    if obj is None:
        return "null"
    if isinstance(obj, bool):
        return "True" if obj else "False"
    if isinstance(obj, str):
        return fmt_str(obj)
    if isinstance(obj, (bytes, bytearray)):
        return fmt_opaque(obj)
    if isinstance(obj, numbers.Number):
        try:
            return str(obj)
        except Exception:
            return fmt_opaque(obj)
    return fmt_opaque(obj)


def fmt_str(s: str) -> str:
    """Quote a string, escaping backslash, double quote, CR and LF only."""
    for raw, escaped in _STR_ESCAPES:
        s = s.replace(raw, escaped)
    return f'"{s}"'


def fmt_opaque(obj: Any) -> str:
    """
    Defensive repr() call - handle broken __repr__ methods gracefully.

    Used for values the printer can not or should not look into:
    functions, classes, modules, and objects without introspectable fields.
    """
    try:
        return repr(obj)
    except Exception as e:
        return f"<{type(obj).__name__} object (repr failed: {type(e).__name__})>"


def fmt_type(obj: Any) -> str:
    """
    Format type information for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(int)
        '<int>'
    """
    return f"<{class_name(obj)}>"


def fmt_value(obj: Any, max_repr: int = 120) -> str:
    """
    Format a single value as a type–value pair for exception messages.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("abc")
        "<str: 'abc'>"
    """
    r = fmt_opaque(obj)
    if max_repr > 0 and len(r) > max_repr:
        r = r[:max_repr] + "..."
    return f"<{type(obj).__name__}: {r}>"


def is_primitive(obj: Any) -> bool:
    """Check if object is rendered as a leaf literal by fmt_leaf()."""
    return isinstance(obj, PRIMITIVE_TYPES)
