from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, TypeAlias, TypeVar

import numpy as np
import numpy.typing as npt

from thinline.errors import InvalidArgument

GrayImage: TypeAlias = npt.NDArray[np.uint8]
BinaryImage: TypeAlias = npt.NDArray[np.uint8]
ForegroundMask: TypeAlias = npt.NDArray[np.bool_]

_E = TypeVar("_E", bound=Enum)

# Short names accepted on the command line and in config files.
_ALIASES: dict[str, dict[str, str]] = {
    "ForegroundPolarity": {"b": "black", "w": "white"},
    "MarkingMethod": {"s": "standard", "m": "modified"},
    "EdgeOperator": {"s": "sobel", "s4": "sobel4"},
}


def _parse_choice(enum_cls: type[_E], value: object) -> _E:
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().lower()
    key = _ALIASES.get(enum_cls.__name__, {}).get(key, key)
    try:
        return enum_cls(key)
    except ValueError as exc:
        choices = ", ".join(str(member.value) for member in enum_cls)
        raise InvalidArgument(f"{enum_cls.__name__} must be one of: {choices}; got {value!r}") from exc


class ForegroundPolarity(str, Enum):
    """Which raw pixel value represents the lines to be thinned."""

    BLACK = "black"
    WHITE = "white"

    @classmethod
    def parse(cls, value: object) -> ForegroundPolarity:
        return _parse_choice(cls, value)

    @property
    def foreground_value(self) -> int:
        return 0 if self is ForegroundPolarity.BLACK else 255

    @property
    def background_value(self) -> int:
        return 255 if self is ForegroundPolarity.BLACK else 0


class MarkingMethod(str, Enum):
    """Pixel-marking rule of the thinning engine.

    STANDARD follows Zhang & Suen (1984), MODIFIED follows Chen & Hsu (1988)
    and additionally removes staircase and corner pixels.
    """

    STANDARD = "standard"
    MODIFIED = "modified"

    @classmethod
    def parse(cls, value: object) -> MarkingMethod:
        return _parse_choice(cls, value)


class EdgeOperator(str, Enum):
    """SOBEL keeps the positive North/East responses, SOBEL4 the signed pair."""

    SOBEL = "sobel"
    SOBEL4 = "sobel4"

    @classmethod
    def parse(cls, value: object) -> EdgeOperator:
        return _parse_choice(cls, value)


class ThinningState(str, Enum):
    CONVERGED = "converged"
    ABORTED = "aborted"


@dataclass(slots=True)
class ThinningResult:
    image: BinaryImage
    iterations: int
    deleted_px: int
    state: ThinningState

    @property
    def converged(self) -> bool:
        return self.state is ThinningState.CONVERGED


@dataclass(slots=True)
class PipelineResult:
    output_path: Path
    report: dict[str, Any] = field(default_factory=dict)
