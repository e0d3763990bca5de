"""
Printable protocols and record introspection.

Classes opt into custom rendering through small dunder protocols; everything
else is introspected here: field discovery for dataclasses, slotted and plain
classes, plus the singleton and nested-class checks the record formatter uses.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import fields as dc_fields, is_dataclass
from typing import Any, Iterable, Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name, handle_error


# Classes --------------------------------------------------------------------------------------------------------------


@runtime_checkable
class PrettyPrintable(Protocol):
    """
    Protocol for objects that render themselves with help from the printer.

    The printer argument formats sub-values within the current traversal,
    so cycles through these sub-values are still detected:

        >>> class Pair:
        ...     def __init__(self, a, b):
        ...         self.a, self.b = a, b
        ...     def __pformat__(self, printer):
        ...         return f"<{printer.pformat(self.a)} & {printer.pformat(self.b)}>"
    """

    def __pformat__(self, printer: Any) -> str: ...


@runtime_checkable
class SimplePrintable(Protocol):
    """Protocol for objects that render themselves without recursion."""

    def __pstr__(self) -> str: ...


@runtime_checkable
class FieldsProvider(Protocol):
    """Protocol for records that list their own (name, value) fields, in display order."""

    def __pprint_fields__(self) -> Iterable[tuple[str, Any]]: ...


# Methods --------------------------------------------------------------------------------------------------------------


def display_name(obj: Any) -> str:
    """
    Record name shown by the printer: `__pprint_name__` if the object defines one,
    otherwise its class name.
    """
    name = getattr(obj, "__pprint_name__", None)
    if isinstance(name, str):
        return name
    return class_name(obj)


def is_inner(obj: Any) -> bool:
    """
    Check if obj is an instance of a class nested in another class.

    Classes defined inside functions do not count, only the part of the
    qualified name after the last function scope is looked at.

    Examples:
        >>> class Outer:
        ...     class Inner: ...
        >>> is_inner(Outer.Inner())
        True
        >>> is_inner(Outer())
        False
    """
    qualname = getattr(type(obj), "__qualname__", "")
    if not isinstance(qualname, str):
        return False
    return "." in qualname.rpartition("<locals>.")[2]


def is_introspectable(obj: Any, on_error: str = "skip") -> bool:
    """Check if search_fields() can list fields of obj."""
    if isinstance(obj, type):
        return False
    if isinstance(obj, FieldsProvider) or is_dataclass(obj):
        return True
    try:
        vars(obj)
        return True
    except TypeError:
        pass  # No __dict__
    except Exception as e:
        handle_error(e, on_error, f"Failed to read attributes of {class_name(obj)}")
    return _slot_names(type(obj))[0]


def is_singleton(obj: Any, on_error: str = "skip") -> bool:
    """
    Check if obj is the single instance of its class.

    Recognized patterns:
        - the class keeps its instance in `_instance` (sentinel-style `__new__`)
        - the class declares `__pprint_singleton__ = True`

    Introspection failures count as "not a singleton".
    """
    try:
        cls = type(obj)
        if getattr(cls, "__pprint_singleton__", False) is True:
            return True
        return getattr(cls, "_instance", None) is obj
    except Exception as e:
        handle_error(e, on_error, f"Failed to check singleton {class_name(obj)}")
        return False


def search_fields(
        obj: Any,
        *,
        include_private: bool = True,
        on_error: str = "skip",
) -> list[tuple[str, Any]] | None:
    """
    List the (name, value) fields of a record, in declaration order.

    Field sources, first match wins:
        - `__pprint_fields__()` when the class provides it, used as is
        - dataclass fields
        - `__slots__` across the MRO (base classes first), then instance `__dict__`
          in insertion order

    Args:
        obj: The record to inspect.
        include_private: Include names starting with '_' (always excluded: dunder names).
        on_error: Policy for attributes that raise on access, "skip", "warn" or "raise".

    Returns:
        List of (name, value) pairs, or None if obj has no introspectable field
        storage at all (no __dict__, no __slots__, not a dataclass).

    Notes:
        - Unset slots are skipped
        - Exceptions raised by `__pprint_fields__()` propagate

    Examples:
        >>> class P:
        ...     def __init__(self):
        ...         self.x, self._y = 1, 2
        >>> search_fields(P())
        [('x', 1), ('_y', 2)]
        >>> search_fields(P(), include_private=False)
        [('x', 1)]
        >>> search_fields(object()) is None
        True
    """
    if isinstance(obj, FieldsProvider) and not isinstance(obj, type):
        return [(str(name), value) for name, value in obj.__pprint_fields__()]

    if is_dataclass(obj) and not isinstance(obj, type):
        candidates = [(f.name, None) for f in dc_fields(obj)]
        instance_dict = None
    else:
        has_slots, slots = _slot_names(type(obj))
        try:
            instance_dict = vars(obj)
        except TypeError:
            instance_dict = None  # No __dict__
        except Exception as e:
            handle_error(e, on_error, f"Failed to read attributes of {class_name(obj)}")
            instance_dict = None

        if instance_dict is None and not has_slots:
            return None

        candidates = [(name, None) for name in slots]
        if instance_dict is not None:
            candidates += [(name, instance_dict) for name in list(instance_dict)]

    fields = []
    seen = set()
    for name, source in candidates:
        if name in seen or not isinstance(name, str):
            continue
        seen.add(name)

        # Always skip dunder
        if name.startswith("__") and name.endswith("__"):
            continue
        if not include_private and name.startswith("_"):
            continue

        if source is not None:
            fields.append((name, source[name]))
            continue

        try:
            value = getattr(obj, name)
        except AttributeError:
            continue  # Unset slot
        except Exception as e:
            handle_error(e, on_error, f"Failed to get {class_name(obj)}.{name}")
            continue
        fields.append((name, value))

    return fields


# Private Methods ------------------------------------------------------------------------------------------------------


def _slot_names(cls: type) -> tuple[bool, list[str]]:
    """Check if any class in the MRO declares __slots__, and collect slot names base first."""
    declared = False
    names: list[str] = []
    for base in reversed(cls.__mro__):
        if base is object or "__slots__" not in base.__dict__:
            continue
        declared = True
        slots = base.__dict__["__slots__"]
        if isinstance(slots, str):
            slots = [slots]
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            # Private slots are stored name-mangled
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{base.__name__.lstrip('_')}{name}"
            names.append(name)
    return declared, names
