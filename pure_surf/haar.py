"""
Haar wavelet responses over the integral image.
"""

import numpy as np

from .integral_image import box_sums


def round_half_away(value):
    """Round to the nearest integer, halves away from zero."""
    value = np.asarray(value, dtype=np.float64)
    return (np.sign(value) * np.floor(np.abs(value) + 0.5)).astype(np.intp)


def haar_half_width(size):
    """Half width of the two boxes of a Haar wavelet of the given size."""
    return int(round_half_away(size / 4.0))


def haar_x(integral, xs, ys, size):
    """
    Horizontal Haar response: left box minus right box.

    Args:
        integral: Integral image
        xs, ys: Integer sample positions (arrays of the same shape)
        size: Wavelet size in pixels

    Returns:
        Array of responses, shaped like xs
    """
    h = haar_half_width(size)
    left = box_sums(integral, xs - h, ys - h, xs, ys + h)
    right = box_sums(integral, xs, ys - h, xs + h, ys + h)
    return left - right


def haar_y(integral, xs, ys, size):
    """Vertical Haar response: top box minus bottom box."""
    h = haar_half_width(size)
    top = box_sums(integral, xs - h, ys - h, xs + h, ys)
    bottom = box_sums(integral, xs - h, ys, xs + h, ys + h)
    return top - bottom


def in_bounds(integral, xs, ys):
    """Mask of sample positions that fall inside the image."""
    height, width = integral.shape[0] - 1, integral.shape[1] - 1
    return (xs >= 0) & (xs < width) & (ys >= 0) & (ys < height)
