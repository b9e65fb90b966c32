"""8-neighborhood predicates shared by the thinning rules.

Neighbors are read clockwise starting north, using the labels of the
Zhang-Suen paper::

    P9 P2 P3
    P8 P1 P4
    P7 P6 P5

Out-of-bounds neighbors count as background.
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np
import numpy.typing as npt

from thinline.types import ForegroundMask

# (row, col) offsets of P2..P9.
RING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
)


class Neighborhood(NamedTuple):
    p2: bool
    p3: bool
    p4: bool
    p5: bool
    p6: bool
    p7: bool
    p8: bool
    p9: bool

    def neighbor_count(self) -> int:
        return sum(1 for filled in self if filled)

    def transition_count(self) -> int:
        """Background to foreground transitions around the ring, P9 wrapping to P2."""
        ring = tuple(self)
        return sum(1 for i, filled in enumerate(ring) if not filled and ring[(i + 1) % 8])


def _in_bounds(r: int, c: int, h: int, w: int) -> bool:
    return 0 <= r < h and 0 <= c < w


def classify_pixel(mask: ForegroundMask, row: int, col: int) -> Neighborhood:
    h, w = mask.shape
    return Neighborhood(
        *(
            bool(mask[row + dr, col + dc]) if _in_bounds(row + dr, col + dc, h, w) else False
            for dr, dc in RING_OFFSETS
        )
    )


def neighbor_planes(mask: ForegroundMask) -> npt.NDArray[np.bool_]:
    """Stack of shape ``(8, h, w)``; plane ``i`` holds neighbor ``P(i + 2)`` of every pixel."""
    h, w = mask.shape
    padded = np.pad(mask.astype(bool), 1, mode="constant", constant_values=False)
    return np.stack([padded[1 + dr : 1 + dr + h, 1 + dc : 1 + dc + w] for dr, dc in RING_OFFSETS])


def neighbor_count(planes: npt.NDArray[np.bool_]) -> npt.NDArray[np.uint8]:
    return planes.sum(axis=0, dtype=np.uint8)


def transition_count(planes: npt.NDArray[np.bool_]) -> npt.NDArray[np.uint8]:
    following = np.roll(planes, -1, axis=0)
    return (~planes & following).sum(axis=0, dtype=np.uint8)
