"""Change-tracking base class for view state"""

import collections
from typing import Any, Callable

MISSING = object()


class State:
    """A simple state base class that tracks changes to its public attributes.

    Subclasses are usually dataclasses. Every assignment that changes the value
    of a public attribute records the attribute name and notifies the watchers
    registered for it.
    """

    def __setattr__(self, name: str, value: Any) -> None:
        """Override setattr to track changes to public attributes."""
        old_value = getattr(self, name, MISSING)
        super().__setattr__(name, value)
        if not name.startswith("_") and (
            old_value is MISSING or old_value != value
        ):
            self.mark_changed(name)

    @property
    def _changes(self) -> set[str]:
        return vars(self).setdefault("_changes_set", set())

    @property
    def _watchers(self) -> dict[str, list[Callable[[], None]]]:
        return vars(self).setdefault(
            "_watchers_map", collections.defaultdict(list)
        )

    def mark_changed(self, name: str) -> None:
        """Record a change that did not go through attribute assignment"""
        self._changes.add(name)
        for callback in self._watchers[name]:
            callback()

    @property
    def changes(self) -> set[str]:
        """Get the set of attribute names that have changed."""
        return self._changes.copy()

    def clear_changes(self) -> None:
        """Clear the changes set."""
        self._changes.clear()

    def register_watcher(self, name: str, callback: Callable[[], None]) -> None:
        """Register a callback to be notified when an attribute changes"""
        self._watchers[name].append(callback)
