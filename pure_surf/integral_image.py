"""
Integral image (summed-area table) and constant-time box sums.
"""

import logging

import numpy as np

from . import constants
from .errors import InvalidInputError

logger = logging.getLogger(__name__)


def validate_image(image):
    """
    Check that an image can enter the pipeline.

    Args:
        image: 2D array-like of intensities in [0, 1]

    Returns:
        The image as a float64 array, with rounding noise just outside
        [0, 1] clipped away

    Raises:
        InvalidInputError: If the image is not numeric, not 2D, empty,
            contains non-finite values or values outside [0, 1]
    """
    try:
        image = np.array(image, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Image is not a numeric array: {e}") from e

    if image.ndim != 2:
        raise InvalidInputError(f"Expected a 2D grayscale image, got shape {image.shape}")
    if image.size == 0:
        raise InvalidInputError(f"Image is empty (shape {image.shape})")
    if not np.all(np.isfinite(image)):
        raise InvalidInputError("Image contains non-finite values")

    lo, hi = image.min(), image.max()
    tol = constants.INTENSITY_TOLERANCE
    if lo < -tol or hi > 1.0 + tol:
        raise InvalidInputError(
            f"Image intensities must be normalized to [0, 1], got range [{lo}, {hi}]"
        )
    np.clip(image, 0.0, 1.0, out=image)

    return image


def integral_image(image):
    """
    Compute the summed-area table of an image.

    Cell (r, c) holds the sum of all pixels with row < r and column < c,
    so the table has one extra zero row on top and one zero column on
    the left.

    Args:
        image: 2D array of intensities in [0, 1]

    Returns:
        (H+1) x (W+1) float64 array
    """
    image = validate_image(image)
    height, width = image.shape

    table = np.zeros((height + 1, width + 1), dtype=np.float64)
    table[1:, 1:] = np.cumsum(np.cumsum(image, axis=0), axis=1)
    table.setflags(write=False)

    logger.debug("Built integral image for %dx%d input", height, width)
    return table


def box_sums(integral, x1, y1, x2, y2):
    """
    Sum image values inside rectangles, vectorized over the corners.

    Corners are inclusive pixel coordinates and may be arrays of any
    broadcastable shape. Each rectangle is clamped to the image before
    lookup; one that lies entirely outside sums to zero.

    Args:
        integral: Integral image from integral_image()
        x1, y1: Top-left corner(s)
        x2, y2: Bottom-right corner(s)

    Returns:
        Array of sums with the broadcast shape of the corners
    """
    height = integral.shape[0] - 1
    width = integral.shape[1] - 1

    x1 = np.maximum(np.asarray(x1, dtype=np.intp), 0)
    y1 = np.maximum(np.asarray(y1, dtype=np.intp), 0)
    x2 = np.minimum(np.asarray(x2, dtype=np.intp), width - 1)
    y2 = np.minimum(np.asarray(y2, dtype=np.intp), height - 1)
    valid = (x1 <= x2) & (y1 <= y2)

    # Keep lookups in range for rectangles that will be zeroed anyway
    x1 = np.clip(x1, 0, width - 1)
    y1 = np.clip(y1, 0, height - 1)
    x2 = np.clip(x2, 0, width - 1)
    y2 = np.clip(y2, 0, height - 1)

    total = (integral[y2 + 1, x2 + 1] - integral[y2 + 1, x1]
             - integral[y1, x2 + 1] + integral[y1, x1])
    return np.where(valid, total, 0.0)


def box_sum(integral, x1, y1, x2, y2):
    """Sum image values inside one clamped rectangle."""
    return float(box_sums(integral, x1, y1, x2, y2))
