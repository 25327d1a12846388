from __future__ import annotations

from enum import Enum

from core.exceptions import ValidationError


class DateAnchor(str, Enum):
    START = "start"
    END = "end"


class DependencyType(str, Enum):
    FINISH_TO_START = "FS"
    FINISH_TO_FINISH = "FF"
    START_TO_START = "SS"
    START_TO_FINISH = "SF"

    @property
    def anchor(self) -> DateAnchor:
        """Date read on the upstream (predecessor) side of the link."""
        return _ANCHORS[self]

    @property
    def constrained(self) -> DateAnchor:
        """Date limited on the downstream (successor) side of the link."""
        return _CONSTRAINED[self]


class LinkDirection(str, Enum):
    PREDECESSOR = "predecessor"
    SUCCESSOR = "successor"


_ANCHORS: dict[DependencyType, DateAnchor] = {
    DependencyType.FINISH_TO_START: DateAnchor.END,
    DependencyType.START_TO_START: DateAnchor.START,
    DependencyType.FINISH_TO_FINISH: DateAnchor.END,
    DependencyType.START_TO_FINISH: DateAnchor.START,
}

_CONSTRAINED: dict[DependencyType, DateAnchor] = {
    DependencyType.FINISH_TO_START: DateAnchor.START,
    DependencyType.START_TO_START: DateAnchor.START,
    DependencyType.FINISH_TO_FINISH: DateAnchor.END,
    DependencyType.START_TO_FINISH: DateAnchor.END,
}


def coerce_dependency_type(value: DependencyType | str) -> DependencyType:
    """Accept a DependencyType or its code (FS, SS, FF, SF)."""
    try:
        return DependencyType(value)
    except ValueError:
        codes = ", ".join(member.value for member in DependencyType)
        raise ValidationError(
            f"Unknown dependency type {value!r}; expected one of {codes}.",
            code="INVALID_DEPENDENCY_TYPE",
        ) from None


__all__ = ["DateAnchor", "DependencyType", "LinkDirection", "coerce_dependency_type"]
