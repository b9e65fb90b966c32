"""Parallel thinning of binary images.

Every sub-pass marks pixels from a read-only snapshot of the image and then
deletes all marks at once, so no marking decision depends on another deletion
in the same sub-pass. An iteration is sub-pass A (south-east boundary and
north-west corner) followed by sub-pass B (north-west boundary and south-east
corner); thinning converges when a whole iteration deletes nothing.

References:
    Zhang, T. Y. & Suen, C. Y. (1984). A fast parallel algorithm for thinning
    digital patterns. Commun. ACM 27(3), 236-239.

    Chen, Y.-S. & Hsu, W.-H. (1988). A modified fast parallel algorithm for
    thinning digital patterns. Pattern Recognition Letters 7, 99-106.
"""

from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt

from thinline.errors import InvalidArgument
from thinline.types import BinaryImage, ForegroundMask, ForegroundPolarity, MarkingMethod, ThinningResult, ThinningState
from thinline.vision.neighbors import neighbor_count, neighbor_planes, transition_count
from thinline.vision.preprocess import foreground_mask, from_foreground_mask

LOGGER = logging.getLogger(__name__)

BoolPlane = npt.NDArray[np.bool_]


def _standard_marks(mask: ForegroundMask, first_pass: bool) -> BoolPlane:
    planes = neighbor_planes(mask)
    p2, _, p4, _, p6, _, p8, _ = planes
    count = neighbor_count(planes)
    transitions = transition_count(planes)

    base = mask & (count >= 2) & (count <= 6) & (transitions == 1)
    if first_pass:
        return base & ~(p2 & p4 & p6) & ~(p4 & p6 & p8)
    return base & ~(p2 & p4 & p8) & ~(p2 & p6 & p8)


def _modified_marks(mask: ForegroundMask, first_pass: bool) -> BoolPlane:
    planes = neighbor_planes(mask)
    p2, p3, p4, p5, p6, p7, p8, p9 = planes
    count = neighbor_count(planes)
    transitions = transition_count(planes)

    base = mask & (count >= 2) & (count <= 7)
    single = base & (transitions == 1)
    double = base & (transitions == 2)

    if first_pass:
        single_marks = single & ~(p2 & p4 & p6) & ~(p4 & p6 & p8)
        double_marks = double & (
            (p2 & p4 & ~p6 & ~p7 & ~p8) | (p4 & p6 & ~p2 & ~p8 & ~p9)
        )
    else:
        single_marks = single & ~(p2 & p4 & p8) & ~(p2 & p6 & p8)
        double_marks = double & (
            (p2 & p8 & ~p4 & ~p5 & ~p6) | (p6 & p8 & ~p2 & ~p3 & ~p4)
        )
    return single_marks | double_marks


_MARKERS = {
    MarkingMethod.STANDARD: _standard_marks,
    MarkingMethod.MODIFIED: _modified_marks,
}


def mark_pixels(mask: ForegroundMask, method: MarkingMethod, first_pass: bool) -> BoolPlane:
    """Pixels one sub-pass would delete from ``mask``; ``mask`` is not modified."""
    return _MARKERS[MarkingMethod.parse(method)](mask, first_pass)


def thin_mask(
    mask: ForegroundMask,
    method: MarkingMethod = MarkingMethod.MODIFIED,
    max_iterations: int | None = None,
) -> tuple[ForegroundMask, int, int, ThinningState]:
    if max_iterations is not None and max_iterations < 1:
        raise InvalidArgument(f"max_iterations must be >= 1, got {max_iterations}")

    work = mask.astype(bool, copy=True)
    deleted_total = 0
    iteration = 0

    while max_iterations is None or iteration < max_iterations:
        iteration += 1
        deleted = 0
        for first_pass in (True, False):
            marks = mark_pixels(work, method, first_pass)
            n_marked = int(marks.sum())
            if n_marked:
                work[marks] = False
                deleted += n_marked

        LOGGER.debug("iteration %d deleted %d px", iteration, deleted)
        if deleted == 0:
            return work, iteration, deleted_total, ThinningState.CONVERGED
        deleted_total += deleted

    LOGGER.warning(
        "thinning did not converge within %d iterations; returning best-effort skeleton",
        max_iterations,
    )
    return work, iteration, deleted_total, ThinningState.ABORTED


def thin_image_edges(
    image: BinaryImage,
    method: MarkingMethod = MarkingMethod.MODIFIED,
    polarity: ForegroundPolarity = ForegroundPolarity.BLACK,
    max_iterations: int | None = None,
) -> ThinningResult:
    """Thin the foreground lines of a binary image to one pixel width.

    ``image`` must contain only 0 and 255; ``polarity`` tells which of the two
    is foreground. ``max_iterations=None`` runs until convergence. When the
    bound is hit the partially thinned image is returned with
    ``state == ThinningState.ABORTED``.
    """
    polarity = ForegroundPolarity.parse(polarity)
    method = MarkingMethod.parse(method)
    mask = foreground_mask(image, polarity)

    thinned, iterations, deleted, state = thin_mask(mask, method=method, max_iterations=max_iterations)
    LOGGER.info(
        "%s thinning %s after %d iterations, deleted %d px",
        method.value,
        state.value,
        iterations,
        deleted,
    )
    return ThinningResult(
        image=from_foreground_mask(thinned, polarity),
        iterations=iterations,
        deleted_px=deleted,
        state=state,
    )
