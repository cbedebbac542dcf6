"""
Adaptive Threshold - Map a viewport width to a target point count.

A rendering surface cannot show more distinct points than roughly twice its
pixel width; thresholds sit generously above that bound.
"""

import logging
import math
import numbers
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Used when neither a width nor a provider is given
DEFAULT_VIEWPORT_WIDTH = 1920

# (exclusive upper width bound in px, threshold), checked in order
VIEWPORT_BREAKPOINTS = (
    (640, 500),     # mobile
    (1024, 1000),   # tablet
    (1920, 1500),   # desktop
)
LARGE_VIEWPORT_THRESHOLD = 2000  # large desktop / 4K


def optimal_threshold(
    viewport_width: Optional[float] = None,
    viewport_provider: Optional[Callable[[], float]] = None,
) -> int:
    """
    Recommend a downsampling threshold for a viewport.

    Args:
        viewport_width: Viewport width in pixels
        viewport_provider: Called for the current width when
            viewport_width is None (e.g. a chart widget's width getter)

    Returns:
        500, 1000, 1500 or 2000

    Raises:
        ValueError: if the width is negative or not a number
    """
    width = viewport_width
    if width is None and viewport_provider is not None:
        width = viewport_provider()
    if width is None:
        width = DEFAULT_VIEWPORT_WIDTH

    if isinstance(width, bool) or not isinstance(width, numbers.Real):
        raise ValueError(f"viewport width must be a number, got {width!r}")
    if math.isnan(width) or width < 0:
        raise ValueError(f"viewport width must be >= 0, got {width}")

    for upper_bound, threshold in VIEWPORT_BREAKPOINTS:
        if width < upper_bound:
            break
    else:
        threshold = LARGE_VIEWPORT_THRESHOLD

    logger.debug("Viewport width %s px -> threshold %d", width, threshold)
    return threshold
