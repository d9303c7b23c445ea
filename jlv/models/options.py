"""Autocomplete options offered for a pending command"""

import dataclasses
from typing import Iterable


@dataclasses.dataclass
class Option:
    """One choice of the autocomplete list"""

    name: str
    completion: str
    bold: tuple[int, int] | None = None
    visible: bool = True


class Options:
    """The autocomplete list, narrowed by a typed prefix.

    When `replace` is set, choosing an option replaces the pending command with
    its completion; otherwise the completion is appended to it.
    """

    def __init__(
        self,
        options: Iterable[Option] = (),
        replace: bool = False,
        prefix: str = "",
    ) -> None:
        self.options = list(options)
        self.replace = replace
        self.prefix = prefix
        self.current: int | None = None
        self.apply_prefix()

    @classmethod
    def from_names(cls, names: Iterable[str], append_slash: bool) -> "Options":
        """Create options that complete with their own name"""
        suffix = "/" if append_slash else ""
        return cls(Option(name, name + suffix) for name in names)

    def add(
        self, name: str, completion: str, bold: tuple[int, int] | None = None
    ) -> "Options":
        """Add an option"""
        self.options.append(Option(name, completion, bold))
        self.apply_prefix()
        return self

    def set_prefix(self, prefix: str) -> None:
        """Narrow the visible options to those containing the prefix"""
        self.prefix = prefix
        self.current = None
        self.apply_prefix()

    def apply_prefix(self) -> None:
        """Recompute visibility and keep the current option visible"""
        for option in self.options:
            option.visible = self.prefix in option.name
        if self.current is None or not self.options[self.current].visible:
            self.current = next(
                (i for i, option in enumerate(self.options) if option.visible), None
            )

    @property
    def visible(self) -> list[Option]:
        """Options matching the prefix"""
        return [option for option in self.options if option.visible]

    @property
    def selected(self) -> Option | None:
        """The highlighted option"""
        if self.current is None:
            return None
        return self.options[self.current]

    def next(self) -> None:
        """Highlight the next visible option, wrapping around"""
        self._step(1)

    def prev(self) -> None:
        """Highlight the previous visible option, wrapping around"""
        self._step(-1)

    def _step(self, delta: int) -> None:
        if self.current is None:
            return
        count = len(self.options)
        idx = (self.current + delta) % count
        while idx != self.current:
            if self.options[idx].visible:
                self.current = idx
                return
            idx = (idx + delta) % count
