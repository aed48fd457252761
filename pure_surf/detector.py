"""
Multi-scale blob detection with box-filter Hessian approximations.

Every scale level reads the same integral image; only the filter
footprint grows, the image is never resampled.
"""

import logging

import numpy as np
from scipy.ndimage import maximum_filter

from . import constants
from .integral_image import box_sums
from .types import Candidate, DetectionResult

logger = logging.getLogger(__name__)


class HessianDetector:
    """
    Fast-Hessian style detector.

    For each filter size the second-order derivatives are approximated by
    signed box sums, combined into a scale-normalized determinant map, and
    thresholded local maxima of that map become candidates.
    """

    def __init__(self, config):
        """
        Initialize detector.

        Args:
            config: SurfConfig with the filter sizes and threshold base
        """
        self.config = config
        self.levels = config.scale_levels()

    def detect(self, integral):
        """
        Compute response maps and candidates for every scale level.

        Args:
            integral: Integral image of the input

        Returns:
            DetectionResult
        """
        response_maps = []
        candidates = []

        for level in self.levels:
            response = self.response_map(integral, level)
            found = self.find_candidates(response, level)
            logger.debug("Scale %.2f (filter size %d): %d candidates",
                         level.scale, level.filter_size, len(found))
            response_maps.append(response)
            candidates.extend(found)

        return DetectionResult(
            levels=self.levels,
            response_maps=tuple(response_maps),
            candidates=tuple(candidates),
        )

    def hessian_responses(self, integral, level):
        """
        Box-filter approximations of the second derivatives.

        Args:
            integral: Integral image
            level: ScaleLevel giving the filter size

        Returns:
            Lxx, Lyy, Lxy: (H x W) arrays, zero outside the interior
                where the footprint fits in the image
        """
        height, width = integral.shape[0] - 1, integral.shape[1] - 1
        Lxx = np.zeros((height, width))
        Lyy = np.zeros((height, width))
        Lxy = np.zeros((height, width))

        y_min, y_max, x_min, x_max = level.interior(height, width)
        if y_min > y_max or x_min > x_max:
            return Lxx, Lyy, Lxy

        rows, cols = np.mgrid[y_min:y_max + 1, x_min:x_max + 1]
        half = level.half_size
        w = half // 3
        s = half // 2

        # Horizontal band with flanking bands above and below
        center = box_sums(integral, cols - half, rows - w, cols + half, rows + w)
        above = box_sums(integral, cols - half, rows - 3 * w, cols + half, rows - w)
        below = box_sums(integral, cols - half, rows + w, cols + half, rows + 3 * w)
        Lxx[y_min:y_max + 1, x_min:x_max + 1] = center - (above + below)

        # Vertical band with flanking bands left and right
        center = box_sums(integral, cols - w, rows - half, cols + w, rows + half)
        left = box_sums(integral, cols - 3 * w, rows - half, cols - w, rows + half)
        right = box_sums(integral, cols + w, rows - half, cols + 3 * w, rows + half)
        Lyy[y_min:y_max + 1, x_min:x_max + 1] = center - (left + right)

        # Diagonal quadrants positive, off-diagonal quadrants negative
        top_left = box_sums(integral, cols - s, rows - s, cols, rows)
        bottom_right = box_sums(integral, cols, rows, cols + s, rows + s)
        top_right = box_sums(integral, cols, rows - s, cols + s, rows)
        bottom_left = box_sums(integral, cols - s, rows, cols, rows + s)
        Lxy[y_min:y_max + 1, x_min:x_max + 1] = (
            (top_left + bottom_right) - (top_right + bottom_left)
        )

        return Lxx, Lyy, Lxy

    def response_map(self, integral, level):
        """
        Scale-normalized Hessian determinant approximation.

        Args:
            integral: Integral image
            level: ScaleLevel

        Returns:
            Read-only (H x W) array, zero outside the interior
        """
        Lxx, Lyy, Lxy = self.hessian_responses(integral, level)
        response = Lxx * Lyy - constants.HESSIAN_XY_WEIGHT * Lxy ** 2
        response /= level.scale ** 4
        response.setflags(write=False)
        return response

    def find_candidates(self, response, level):
        """
        Thresholded strict local maxima of one response map.

        A pixel is kept when it exceeds the level's threshold and every
        other interior value in its neighborhood. Equal neighbors suppress
        each other, so flat plateaus yield nothing.

        Args:
            response: Response map of this level
            level: ScaleLevel

        Returns:
            List of Candidate in raster order
        """
        height, width = response.shape
        threshold = self.config.threshold_for(level.filter_size)
        radius = max(constants.MIN_NMS_RADIUS, level.filter_size // 2)

        # Neighbors outside the interior never take part in the comparison
        masked = np.full(response.shape, -np.inf)
        if radius <= height - 1 - radius and radius <= width - 1 - radius:
            masked[radius:height - radius, radius:width - radius] = \
                response[radius:height - radius, radius:width - radius]

        footprint = np.ones((2 * radius + 1, 2 * radius + 1), dtype=bool)
        footprint[radius, radius] = False
        neighbor_max = maximum_filter(masked, footprint=footprint,
                                      mode='constant', cval=-np.inf)

        is_max = (masked > threshold) & (masked > neighbor_max)
        rows, cols = np.nonzero(is_max)

        return [
            Candidate(
                x=int(c),
                y=int(r),
                scale_index=level.index,
                filter_size=level.filter_size,
                scale=level.scale,
                response=float(response[r, c]),
            )
            for r, c in zip(rows, cols)
        ]
