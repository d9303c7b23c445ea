"""Filter definitions applied to file views"""

import dataclasses
import enum
import operator
from typing import Any, Callable


class FilterOperator(enum.StrEnum):
    """Comparison used by a filter"""

    EQUAL = "eq"
    NOT_EQUAL = "ne"
    GREATER_OR_EQUAL = "ge"
    LESS_OR_EQUAL = "le"
    REGEXP = "regexp"

    @classmethod
    def from_suffix(cls, suffix: str | None) -> "FilterOperator":
        """Get the operator for the suffix of a filter command"""
        return _SUFFIXES[suffix or ""]


_SUFFIXES = {
    "": FilterOperator.EQUAL,
    "+": FilterOperator.GREATER_OR_EQUAL,
    "-": FilterOperator.LESS_OR_EQUAL,
    "!": FilterOperator.NOT_EQUAL,
    "$": FilterOperator.REGEXP,
}

COMPARISONS: dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.EQUAL: operator.eq,
    FilterOperator.NOT_EQUAL: operator.ne,
    FilterOperator.GREATER_OR_EQUAL: operator.ge,
    FilterOperator.LESS_OR_EQUAL: operator.le,
}


@dataclasses.dataclass(frozen=True)
class Filter:
    """One filter application: `tag <operator> mask`"""

    tag: str
    mask: str
    operator: FilterOperator = FilterOperator.EQUAL

    def __str__(self) -> str:
        return f"{self.tag} {self.operator} {self.mask}"

    def compare(self, value: Any, mask: Any) -> bool:
        """Compare a field value with the mask using a non-regexp operator"""
        return COMPARISONS[self.operator](value, mask)
