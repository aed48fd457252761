"""
64-dimensional SURF descriptor.

The window around a keypoint is split into a 4x4 grid of sub-regions,
each summarizing a 5x5 grid of Haar samples as
[sum(dx), sum(|dx|), sum(dy), sum(|dy|)]. Samples and responses are
expressed in the keypoint's rotated frame, so the image itself is never
resampled.
"""

import logging
import math

import numpy as np

from . import constants
from .haar import haar_x, haar_y, in_bounds, round_half_away

logger = logging.getLogger(__name__)


class DescriptorBuilder:
    """
    Computes unit-length SURF descriptors for oriented keypoints.
    """

    def __init__(self, window_factor=constants.DESCRIPTOR_WINDOW_FACTOR,
                 grid=constants.DESCRIPTOR_GRID,
                 samples=constants.DESCRIPTOR_SAMPLES,
                 haar_size_factor=constants.HAAR_SIZE_FACTOR):
        """
        Initialize descriptor builder.

        Args:
            window_factor: Side of the descriptor window in units of scale
            grid: Sub-regions per window side
            samples: Haar samples per sub-region side
            haar_size_factor: Haar wavelet size in units of scale
        """
        self.window_factor = window_factor
        self.grid = grid
        self.samples = samples
        self.haar_size_factor = haar_size_factor

    @property
    def length(self):
        return self.grid * self.grid * constants.DESCRIPTOR_SUMS

    def compute_all(self, integral, keypoints):
        """
        Descriptors for a sequence of keypoints.

        Args:
            integral: Integral image
            keypoints: Sequence of Keypoint

        Returns:
            (N x 64) array, row i describing keypoints[i]
        """
        descriptors = np.zeros((len(keypoints), self.length))
        for i, kp in enumerate(keypoints):
            descriptors[i] = self.compute(integral, kp)
        return descriptors

    def compute(self, integral, keypoint):
        """
        Descriptor of one keypoint.

        Args:
            integral: Integral image
            keypoint: Keypoint with location, scale and orientation

        Returns:
            Vector of unit Euclidean norm, or all zeros when every sample
            is flat or outside the image
        """
        scale = keypoint.scale
        cos_o = math.cos(keypoint.orientation)
        sin_o = math.sin(keypoint.orientation)

        window = float(round_half_away(self.window_factor * scale))
        side = window / self.grid
        haar_size = int(round_half_away(self.haar_size_factor * scale))

        # Sub-region centers and sample steps in the keypoint frame
        centers = (np.arange(self.grid) - self.grid / 2.0 + 0.5) * side
        steps = (np.arange(self.samples) - (self.samples - 1) / 2.0) * scale

        # Axes: [sub-region row, sub-region col, sample row, sample col]
        u = centers[None, :, None, None] + steps[None, None, None, :]
        v = centers[:, None, None, None] + steps[None, None, :, None]
        u, v = np.broadcast_arrays(u, v)

        xs = round_half_away(keypoint.x + u * cos_o - v * sin_o)
        ys = round_half_away(keypoint.y + u * sin_o + v * cos_o)

        sigma = side / 2.0
        du = steps[None, None, None, :]
        dv = steps[None, None, :, None]
        weight = np.exp(-(du ** 2 + dv ** 2) / (2.0 * sigma ** 2))
        weight = weight * in_bounds(integral, xs, ys)

        hx = haar_x(integral, xs, ys, haar_size)
        hy = haar_y(integral, xs, ys, haar_size)
        along = hx * cos_o + hy * sin_o
        across = -hx * sin_o + hy * cos_o

        sums = np.stack([
            np.sum(weight * along, axis=(2, 3)),
            np.sum(weight * np.abs(along), axis=(2, 3)),
            np.sum(weight * across, axis=(2, 3)),
            np.sum(weight * np.abs(across), axis=(2, 3)),
        ], axis=-1)
        descriptor = sums.reshape(-1)

        norm = np.linalg.norm(descriptor)
        if norm > 0:
            descriptor = descriptor / norm
        else:
            logger.debug("Zero-norm descriptor at (%d, %d)", keypoint.x, keypoint.y)

        return descriptor
