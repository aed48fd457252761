"""
Dominant orientation from Gaussian-weighted Haar responses.
"""

import logging
import math

import numpy as np

from . import constants
from .haar import haar_x, haar_y, in_bounds, round_half_away
from .types import Keypoint

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


class OrientationEstimator:
    """
    Assigns each candidate one orientation in [0, 2*pi).

    Haar responses are sampled on a disc around the keypoint and summed
    with a Gaussian weight; the orientation is the angle of the summed
    (horizontal, vertical) response vector.
    """

    def __init__(self, radius_factor=constants.ORIENTATION_RADIUS_FACTOR,
                 haar_size_factor=constants.HAAR_SIZE_FACTOR):
        """
        Initialize orientation estimator.

        Args:
            radius_factor: Sampling disc radius in units of scale
            haar_size_factor: Haar wavelet size in units of scale
        """
        self.radius_factor = radius_factor
        self.haar_size_factor = haar_size_factor

    def assign(self, integral, candidates):
        """
        Orient every candidate.

        Args:
            integral: Integral image
            candidates: Sequence of Candidate

        Returns:
            Tuple of Keypoint in the same order
        """
        return tuple(
            Keypoint.from_candidate(cand, self.estimate(integral, cand))
            for cand in candidates
        )

    def estimate(self, integral, candidate):
        """
        Orientation of one candidate.

        Samples outside the image are skipped. When no sample is valid,
        or the weighted sums vanish, the orientation is 0.

        Args:
            integral: Integral image
            candidate: Candidate (or Keypoint) with x, y and scale

        Returns:
            Angle in radians in [0, 2*pi)
        """
        scale = candidate.scale
        radius = int(round_half_away(self.radius_factor * scale))
        haar_size = int(round_half_away(self.haar_size_factor * scale))

        dy, dx = np.mgrid[-radius:radius + 1, -radius:radius + 1]
        in_disc = dx ** 2 + dy ** 2 <= radius ** 2
        dx, dy = dx[in_disc], dy[in_disc]
        xs, ys = candidate.x + dx, candidate.y + dy

        valid = in_bounds(integral, xs, ys)
        if not np.any(valid):
            logger.debug("No valid orientation samples at (%d, %d)",
                         candidate.x, candidate.y)
            return 0.0
        dx, dy, xs, ys = dx[valid], dy[valid], xs[valid], ys[valid]

        sigma = max(radius / 2.0, 0.5)
        weight = np.exp(-(dx ** 2 + dy ** 2) / (2.0 * sigma ** 2))

        sum_x = float(np.sum(weight * haar_x(integral, xs, ys, haar_size)))
        sum_y = float(np.sum(weight * haar_y(integral, xs, ys, haar_size)))

        orientation = math.atan2(sum_y, sum_x) % TWO_PI
        if orientation >= TWO_PI:
            orientation = 0.0
        return orientation
