"""
Structural pretty printer.

Renders any object graph, cycles included, as indented human-readable text:

    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Point:
    ...     x: int
    ...     y: int
    >>> pformat(Point(1, 2))
    'Point(x=1, y=2)'
    >>> pformat({"tags": ["a", "bb"], "origin": None})
    '{"tags": ["a", "bb"], "origin": null}'

Short and uniform collections stay compact, long or ragged ones are exploded one
packed line per row; records go multi-line once they no longer fit the width.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import inspect
import sys
from enum import Enum, StrEnum, unique
from itertools import islice
from typing import IO, Any

# Local ----------------------------------------------------------------------------------------------------------------
from .abc import (
    PrettyPrintable,
    SimplePrintable,
    display_name,
    is_inner,
    is_introspectable,
    is_singleton,
    search_fields,
)
from .collections import IdentitySet
from .formatters import fmt_leaf, fmt_opaque, fmt_type, is_primitive
from .layout import MORE, fmt_block, indent_lines, pack_lines
from .options import PrintOptions, get_options
from .typing import UNANNOTATED, declared_types, fmt_declared_type
from .utils import class_name, hex_id


# Classes --------------------------------------------------------------------------------------------------------------


@unique
class Kind(StrEnum):
    """How the printer renders a value."""

    LEAF = "leaf"
    ENUM = "enum"
    OPAQUE = "opaque"
    PRINTABLE = "printable"
    SIMPLE = "simple"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SET = "set"
    RECORD = "record"


class PrettyPrinter:
    """
    Reusable pretty printer.

    Holds immutable options only; every pformat() call runs in its own
    PrintContext, so one printer can be shared freely, across threads included.

    Args:
        options: Formatting options, the module default (see options.configure) if None.
        **overrides: PrintOptions fields to replace on top of options.

    Examples:
        >>> PrettyPrinter(width=20).pformat({"key": "value", "other": 1})
        '{\\n    "key": "value",\\n    "other": 1\\n}'
    """

    def __init__(self, options: PrintOptions | None = None, **overrides) -> None:
        if options is None:
            options = get_options()
        if not isinstance(options, PrintOptions):
            raise TypeError(f"options must be a PrintOptions instance, but found {fmt_type(options)}")
        self.options = options.merge(**overrides) if overrides else options

    def pformat(self, obj: Any) -> str:
        """Format obj as a string."""
        return PrintContext(self.options).render(obj)

    def pprint(self, obj: Any, file: IO[str] | None = None) -> None:
        """Print the formatted obj followed by a newline to file (stdout by default)."""
        print(self.pformat(obj), file=file if file is not None else sys.stdout)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options!r})"


class PrintContext:
    """
    State of one top-level format call.

    Tracks records already rendered, so shared and cyclic references are printed
    once, and containers being rendered, so a container nested in itself is cut
    short as `[...]` / `{...}`.

    This is the `printer` handed to `__pformat__()` of custom printables: call its
    pformat() to render sub-values within the same traversal.
    """

    def __init__(self, options: PrintOptions) -> None:
        self.options = options
        self.seen = IdentitySet()
        self._active = IdentitySet()

    def render(self, obj: Any) -> str:
        """Entry point: format obj with a fresh traversal state, cleared on every exit path."""
        self.seen.reset()
        self._active.reset()
        try:
            return self.pformat(obj)
        finally:
            self.seen.reset()
            self._active.reset()

    def pformat(self, obj: Any) -> str:
        """Format obj recursively within this traversal."""
        kind = classify(obj, self.options.on_error)

        if kind is Kind.LEAF:
            return fmt_leaf(obj)
        if kind is Kind.ENUM:
            return f"{type(obj).__name__}.{obj.name}" if obj.name is not None else fmt_opaque(obj)
        if kind is Kind.OPAQUE:
            return fmt_opaque(obj)
        if kind is Kind.PRINTABLE:
            return obj.__pformat__(self)
        if kind is Kind.SIMPLE:
            return obj.__pstr__()
        if kind is Kind.MAPPING:
            return self._pformat_active(obj, "{", "}", self._pformat_mapping)
        if kind is Kind.SEQUENCE:
            return self._pformat_active(obj, "[", "]", self._pformat_iterable)
        if kind is Kind.SET:
            return self._pformat_active(obj, "{", "}", self._pformat_iterable)
        return self._pformat_record(obj)

    # Private Methods ------------------------------

    def _pformat_active(self, obj, open_ch: str, close_ch: str, fn) -> str:
        """Run fn(obj, open_ch, close_ch) unless obj is already being rendered further up."""
        if not self._active.note(obj):
            return f"{open_ch}{MORE}{close_ch}"
        try:
            return fn(obj, open_ch, close_ch)
        finally:
            self._active.discard(obj)

    def _pformat_mapping(self, mp: abc.Mapping, open_ch: str, close_ch: str) -> str:
        opt = self.options

        if opt.max_items == 0:
            return open_ch + close_ch

        entries: list[str] = []
        for i, (k, v) in enumerate(islice(mp.items(), opt.max_items + 1)):
            if i >= opt.max_items:
                entries.append(MORE)
                break
            entries.append(f"{self.pformat(k)}: {self.pformat(v)}")

        single = ", ".join(entries)
        if len(single) <= opt.width:
            return open_ch + single + close_ch

        # Only the first line of an entry is indented
        body = f",\n{opt.indent}".join(entries)
        return f"{open_ch}\n{opt.indent}{body}\n{close_ch}"

    def _pformat_iterable(self, it: abc.Iterable, open_ch: str, close_ch: str) -> str:
        opt = self.options
        packed = pack_lines(
            (self.pformat(x) for x in it),
            width=opt.width,
            multiple_per_line=opt.multiple_per_line,
            max_items=opt.max_items,
        )
        return fmt_block(packed, open_ch, close_ch, indent=opt.indent, rails=opt.with_rails)

    def _pformat_record(self, obj: Any) -> str:
        opt = self.options

        singleton = is_singleton(obj, on_error=opt.on_error)
        bare_name = not opt.with_ids or singleton
        name = display_name(obj) if bare_name else f"{class_name(obj)}#{hex_id(obj)}"

        # Identity, not equality: equal records are still printed in full
        if not self.seen.note(obj):
            return name if bare_name else f"<{name} (seen)>"

        if singleton:
            return name

        fields = search_fields(obj, include_private=opt.include_private, on_error=opt.on_error) or []
        hints = declared_types(type(obj), on_error=opt.on_error) if opt.with_types else {}

        parts: list[str] = []
        for field_name, value in fields:
            if opt.skip_none and value is None:
                continue
            if opt.skip_inner and is_inner(value) and classify(value, opt.on_error) is Kind.RECORD:
                continue

            if opt.with_types:
                left = f"{field_name}: {fmt_declared_type(hints.get(field_name, UNANNOTATED))}="
            else:
                left = f"{field_name}="
            parts.append(left + self.pformat(value))

        if not parts:
            return name

        total = len(name) + 3 + sum(len(p) for p in parts) + 2 * len(parts)
        if len(parts) <= 1 or total <= opt.width:
            return f"{name}({', '.join(parts)})"

        body = ",\n".join(indent_lines(p, opt.indent, include_first=True, rails=opt.with_rails) for p in parts)
        return f"{name}(\n{body}\n)"


# Methods --------------------------------------------------------------------------------------------------------------


def classify(obj: Any, on_error: str = "skip") -> Kind:
    """
    Decide how obj is rendered.

    on_error applies to attribute read failures while probing for record fields.

    Dispatch Logic (first match wins):
        - None, bool → LEAF
        - Enum member → ENUM (before numbers, so IntEnum renders by name)
        - numbers, str, bytes, bytearray → LEAF
        - classes, modules, functions, methods → OPAQUE
        - __pformat__(printer) → PRINTABLE
        - __pstr__() → SIMPLE
        - Mapping → MAPPING
        - Sequence → SEQUENCE
        - Set → SET
        - objects with introspectable fields → RECORD
        - anything else → OPAQUE

    Examples:
        >>> classify(None)
        <Kind.LEAF: 'leaf'>
        >>> classify((1, 2))
        <Kind.SEQUENCE: 'sequence'>
        >>> classify(len)
        <Kind.OPAQUE: 'opaque'>
    """
    if obj is None or isinstance(obj, bool):
        return Kind.LEAF
    if isinstance(obj, Enum):
        return Kind.ENUM
    if is_primitive(obj):
        return Kind.LEAF
    if isinstance(obj, type) or inspect.ismodule(obj) or inspect.isroutine(obj):
        return Kind.OPAQUE
    if isinstance(obj, PrettyPrintable):
        return Kind.PRINTABLE
    if isinstance(obj, SimplePrintable):
        return Kind.SIMPLE
    if isinstance(obj, abc.Mapping):
        return Kind.MAPPING
    if isinstance(obj, abc.Sequence):
        return Kind.SEQUENCE
    if isinstance(obj, abc.Set):
        return Kind.SET
    if is_introspectable(obj, on_error=on_error):
        return Kind.RECORD
    return Kind.OPAQUE


def pformat(obj: Any, options: PrintOptions | None = None, **overrides) -> str:
    """
    Format any object as indented, human-readable text.

    Args:
        obj: Any Python object, cyclic graphs included.
        options: Formatting options, the module default if None.
        **overrides: PrintOptions fields to replace, e.g. `width=60`.

    Returns:
        The formatted text, possibly multi-line.

    Examples:
        >>> pformat(None)
        'null'
        >>> pformat(["a", "bb", "ccc"])
        '["a", "bb", "ccc"]'
        >>> print(pformat(list(range(30)), width=30))
        [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10,
        11, 12, 13, 14, 15, 16, 17, 18,
        19, 20, 21, 22, 23, 24, 25, 26,
        27, 28, 29]
    """
    return PrettyPrinter(options, **overrides).pformat(obj)


def pprint(obj: Any, options: PrintOptions | None = None, file: IO[str] | None = None, **overrides) -> None:
    """Print the formatted obj followed by a newline to file (stdout by default)."""
    PrettyPrinter(options, **overrides).pprint(obj, file=file)
