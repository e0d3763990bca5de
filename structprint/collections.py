"""
Structprint Collections
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Classes --------------------------------------------------------------------------------------------------------------


class IdentitySet:
    """
    A set of objects compared by identity, not by equality.

    Used to detect cycles and shared references during one traversal.

    - Membership (x in ids) is True only for the very same instance that was noted,
      so two equal-but-distinct objects are both accepted.
    - Unhashable objects (lists, dicts, user classes with __eq__) are supported.
    - Noted objects are kept alive until reset(), so their id() can not be
      recycled by another object while the traversal is running.
    """

    def __init__(self) -> None:
        self._objects: dict[int, Any] = {}

    def note(self, obj: Any) -> bool:
        """
        Record obj if it was not seen yet.

        Returns:
            True if obj was recorded now, False if it was already recorded.
        """
        key = id(obj)
        if key in self._objects:
            return False
        self._objects[key] = obj
        return True

    def discard(self, obj: Any) -> None:
        """Forget obj if it was noted."""
        self._objects.pop(id(obj), None)

    def reset(self) -> None:
        """Forget every noted object."""
        self._objects.clear()

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={len(self)})"
