"""
Immutable records passed between pipeline stages.

Coordinates are 0-based pixel indices: x is the column, y is the row.
A Candidate becomes a Keypoint only once an orientation is known, so no
stage ever sees a partially initialized keypoint.
"""

from dataclasses import dataclass

import numpy as np

from . import constants


@dataclass(frozen=True)
class ScaleLevel:
    """One box-filter size of the scale space."""
    index: int
    filter_size: int
    scale: float

    @property
    def half_size(self):
        return self.filter_size // 2

    def interior(self, height, width):
        """
        Pixel bounds where the filter footprint fits inside the image.

        Returns:
            (y_min, y_max, x_min, x_max), inclusive. The range is empty
            when the image is smaller than the filter.
        """
        h = self.half_size
        return h, height - 1 - h, h, width - 1 - h

    def contains(self, x, y, height, width):
        y_min, y_max, x_min, x_max = self.interior(height, width)
        return x_min <= x <= x_max and y_min <= y <= y_max


@dataclass(frozen=True)
class Candidate:
    """A same-scale local maximum of a response map."""
    x: int
    y: int
    scale_index: int
    filter_size: int
    scale: float
    response: float


@dataclass(frozen=True)
class Keypoint:
    """A suppressed, oriented interest point."""
    x: int
    y: int
    scale: float
    response: float
    orientation: float
    filter_size: int

    @classmethod
    def from_candidate(cls, candidate, orientation):
        return cls(
            x=candidate.x,
            y=candidate.y,
            scale=candidate.scale,
            response=candidate.response,
            orientation=float(orientation),
            filter_size=candidate.filter_size,
        )

    @property
    def pt(self):
        return (self.x, self.y)

    def __repr__(self):
        return (f"Keypoint(pt={self.pt}, scale={self.scale:.2f}, "
                f"orientation={self.orientation:.2f}, response={self.response:.6f})")


@dataclass(frozen=True, eq=False)
class DetectionResult:
    """
    Output of the multi-scale detector.

    Attributes:
        levels: ScaleLevel per response map
        response_maps: Tuple of (H x W) arrays addressed by scale index,
            read-only after detection
        candidates: Candidates of all levels, scale-ascending then raster order
    """
    levels: tuple
    response_maps: tuple
    candidates: tuple


@dataclass(frozen=True, eq=False)
class FeatureSet:
    """
    Keypoints and their descriptors, matched by position.

    Attributes:
        keypoints: Tuple of Keypoint
        descriptors: (N x 64) float array, row i belongs to keypoints[i]
    """
    keypoints: tuple
    descriptors: np.ndarray

    def __post_init__(self):
        if len(self.keypoints) != len(self.descriptors):
            raise ValueError(
                f"Got {len(self.keypoints)} keypoints but {len(self.descriptors)} descriptors"
            )

    @classmethod
    def empty(cls, length=constants.DESCRIPTOR_LENGTH):
        return cls(keypoints=(), descriptors=np.zeros((0, length)))

    def __len__(self):
        return len(self.keypoints)

    def __iter__(self):
        return iter(zip(self.keypoints, self.descriptors))

    def positions(self):
        """Return keypoint locations as an (N x 2) array of (x, y)."""
        if not self.keypoints:
            return np.zeros((0, 2))
        return np.array([kp.pt for kp in self.keypoints], dtype=np.float64)

    def as_arrays(self):
        """
        Column view of the feature set.

        Returns:
            Dictionary with positions, scales, orientations, responses,
            filter_sizes and descriptors arrays
        """
        return {
            'positions': self.positions(),
            'scales': np.array([kp.scale for kp in self.keypoints], dtype=np.float64),
            'orientations': np.array([kp.orientation for kp in self.keypoints], dtype=np.float64),
            'responses': np.array([kp.response for kp in self.keypoints], dtype=np.float64),
            'filter_sizes': np.array([kp.filter_size for kp in self.keypoints], dtype=np.int64),
            'descriptors': np.asarray(self.descriptors),
        }

    def strongest(self, n):
        """
        Keep the n keypoints with the largest response.

        Args:
            n: Number of keypoints to keep

        Returns:
            New FeatureSet ordered by descending response; equal responses
            keep their detection order
        """
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        responses = np.array([kp.response for kp in self.keypoints], dtype=np.float64)
        order = np.argsort(-responses, kind='stable')[:n]
        return FeatureSet(
            keypoints=tuple(self.keypoints[i] for i in order),
            descriptors=self.descriptors[order],
        )
