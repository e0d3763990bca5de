"""
Declared type names for record fields.

Turns type hints into short human-readable names, generic parameters in angle
brackets: `dict[str, list[int]]` reads `dict<str, list<int>>`, a variadic
`tuple[int, ...]` reads `int[]`.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import inspect
import types
import typing
from typing import Annotated, Any, Literal, get_args, get_origin, get_type_hints

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name, handle_error

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["declared_types", "fmt_declared_type"]

UNION_TYPES = (typing.Union, types.UnionType)

UNANNOTATED = "Any"


# Methods --------------------------------------------------------------------------------------------------------------


def declared_types(cls: type, on_error: str = "skip") -> dict[str, Any]:
    """
    Get the declared field types of a class, inherited annotations included.

    Forward references are resolved when possible. If resolution fails the raw
    annotations are returned instead, strings and all.

    Args:
        cls: The class to inspect.
        on_error: Policy for resolution failures, "skip", "warn" or "raise".

    Returns:
        Mapping of field name to type hint.
    """
    try:
        return get_type_hints(cls)
    except Exception as e:
        handle_error(e, on_error, f"Failed to resolve type hints of {class_name(cls)}")

    hints: dict[str, Any] = {}
    for base in reversed(cls.__mro__):
        try:
            hints.update(inspect.get_annotations(base))
        except Exception:
            continue  # Base without readable annotations
    return hints


def fmt_declared_type(tp: Any) -> str:
    """
    Format a type hint as a readable declaration.

    Examples:
        >>> fmt_declared_type(int)
        'int'
        >>> fmt_declared_type(dict[str, list[int]])
        'dict<str, list<int>>'
        >>> fmt_declared_type(tuple[float, ...])
        'float[]'
        >>> fmt_declared_type(int | None)
        'Optional<int>'
        >>> fmt_declared_type("Node")
        'Node'
    """
    if tp is None or tp is type(None):
        return "None"
    if tp is Ellipsis:
        return "..."
    if isinstance(tp, str):
        return tp
    if isinstance(tp, typing.ForwardRef):
        return tp.__forward_arg__
    if isinstance(tp, typing.TypeVar):
        return tp.__name__
    if isinstance(tp, (list, tuple)):
        # Callable parameter lists
        return "[" + ", ".join(fmt_declared_type(a) for a in tp) + "]"

    origin = get_origin(tp)
    args = get_args(tp)

    if origin in UNION_TYPES:
        not_none = [a for a in args if a is not type(None)]
        if len(not_none) == 1 and len(args) == 2:
            return f"Optional<{fmt_declared_type(not_none[0])}>"
        return "Union<" + ", ".join(fmt_declared_type(a) for a in args) + ">"

    if origin is Annotated:
        return fmt_declared_type(args[0])

    if origin is Literal:
        return "Literal<" + ", ".join(repr(a) for a in args) + ">"

    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return f"{fmt_declared_type(args[0])}[]"

    if origin is not None:
        name = _type_name(origin)
        if not args:
            return name
        return f"{name}<" + ", ".join(fmt_declared_type(a) for a in args) + ">"

    if isinstance(tp, type):
        return _type_name(tp)

    # Special forms (Any, NoReturn...) and anything else: the raw descriptor
    name = getattr(tp, "_name", None) or getattr(tp, "__name__", None)
    return name if isinstance(name, str) else str(tp)


# Private Methods ------------------------------------------------------------------------------------------------------


def _type_name(tp: Any) -> str:
    """Qualified name of a class without the enclosing function scopes."""
    qualname = getattr(tp, "__qualname__", None)
    if not isinstance(qualname, str):
        return str(tp)
    return qualname.rpartition("<locals>.")[2]
