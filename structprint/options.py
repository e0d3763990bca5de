"""
Structprint configuration.

Immutable options controlling layout and introspection, a few presets, and the
module-wide default used by printers created without explicit options.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, replace as dataclasses_replace
from typing import Literal, get_args

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type, fmt_value

# Classes --------------------------------------------------------------------------------------------------------------

OnError = Literal["skip", "warn", "raise"]
Preset = Literal["default", "compact", "debug"]


@dataclass(frozen=True)
class PrintOptions:
    """
    Formatting options for PrettyPrinter.

    Layout:
        indent: Indent unit for multi-line blocks (default: 4 spaces)
        width: Column wrap width driving single-line vs multi-line decisions (default: 100)
        with_rails: Draw `|` continuation rails on intermediate lines of indented blocks
        multiple_per_line: Pack several sequence items on one line when they fit
        max_items: Maximum items rendered per sequence, set or mapping before `...`

    Composite records:
        skip_none: Skip fields whose value is None
        with_types: Render declared field types as `name: type=value`
        with_ids: Suffix record names with their identity, `Name#7f3a...`
        skip_inner: Skip fields holding instances of classes nested in other classes
        include_private: Include `_private` fields

    Diagnostics:
        on_error: What to do when introspection of a value fails:
                  - "skip": fall back silently (default)
                  - "warn": fall back and emit RuntimeWarning
                  - "raise": re-raise the original exception

    Class Methods:
        compact(): Narrow output without rails and with short collections
        debug(): Identity suffixes, declared types, nothing skipped, warnings on

    Examples:
        >>> PrintOptions(width=60).width
        60
        >>> PrintOptions.debug().with_ids
        True
        >>> PrintOptions().merge(indent="  ").indent
        '  '
    """

    indent: str = "    "
    skip_none: bool = False
    with_types: bool = False
    with_ids: bool = False
    with_rails: bool = True
    width: int = 100
    multiple_per_line: bool = True
    max_items: int = 50
    skip_inner: bool = True
    include_private: bool = True
    on_error: OnError = "skip"

    def __post_init__(self) -> None:
        """Validate option types and ranges."""
        if not isinstance(self.indent, str):
            raise TypeError(f"indent must be a str, got {fmt_type(self.indent)}")
        for name in ("skip_none", "with_types", "with_ids", "with_rails",
                     "multiple_per_line", "skip_inner", "include_private"):
            val = getattr(self, name)
            if not isinstance(val, bool):
                raise TypeError(f"{name} must be a bool, got {fmt_type(val)}")
        for name, lowest in (("width", 1), ("max_items", 0)):
            val = getattr(self, name)
            if isinstance(val, bool) or not isinstance(val, int):
                raise TypeError(f"{name} must be an int, got {fmt_type(val)}")
            if val < lowest:
                raise ValueError(f"{name} must be >={lowest}, but got {fmt_value(val)}")
        if self.on_error not in get_args(OnError):
            raise ValueError(f"on_error must be one of {get_args(OnError)}, but got {fmt_value(self.on_error)}")

    # Class Methods ------------------------------------

    @classmethod
    def compact(cls) -> "PrintOptions":
        """Narrow output for logs: 2-space indent, no rails, short collections."""
        return cls(indent="  ", width=60, with_rails=False, max_items=20)

    @classmethod
    def debug(cls) -> "PrintOptions":
        """Everything visible: identities, declared types, inner records, warnings."""
        return cls(with_ids=True, with_types=True, skip_inner=False, on_error="warn")

    # Methods ------------------------------------------

    def merge(self, **kwargs) -> "PrintOptions":
        """Return a copy with the given options replaced."""
        return dataclasses_replace(self, **kwargs)


# Module config --------------------------------------------------------------------------------------------------------

_PRESETS = {
    "default": PrintOptions,
    "compact": PrintOptions.compact,
    "debug": PrintOptions.debug,
}

_options = PrintOptions()


def configure(preset: Preset | None = None, **overrides) -> PrintOptions:
    """
    Set the module default options.

    Args:
        preset: Start from a named preset; None keeps the current default as the base,
                so successive calls accumulate.
        **overrides: PrintOptions fields to replace.

    Returns:
        The new default options.

    Raises:
        ValueError: Unknown preset name.

    Examples:
        >>> configure(preset="compact", width=40).width
        40
        >>> configure(preset="default") == PrintOptions()
        True
    """
    global _options

    if preset is None:
        base = _options
    elif preset in _PRESETS:
        base = _PRESETS[preset]()
    else:
        raise ValueError(f"preset must be one of {tuple(_PRESETS)} or None, but got {fmt_value(preset)}")

    _options = base.merge(**overrides) if overrides else base
    return _options


def get_options() -> PrintOptions:
    """Current module default options."""
    return _options
