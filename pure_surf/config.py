"""
Configuration for the SURF pipeline.

A single immutable SurfConfig value is passed to every stage; no stage
reads tunable constants from module globals.
"""

import numbers
from dataclasses import dataclass, fields

from . import constants
from .errors import InvalidConfigError
from .types import ScaleLevel


@dataclass(frozen=True)
class SurfConfig:
    """
    Tunable parameters of the detector and suppression passes.

    Attributes:
        filter_sizes: Strictly ascending odd box-filter sizes (>= 9)
        threshold_base: Response floor before the (base / fs)^4 scaling
        cross_scale_margin: Veto multiplier for smaller-scale responses
        cluster_radius_factor: Spatial suppression radius per unit filter size
        base_filter_size: Filter size that defines scale 1.0
    """
    filter_sizes: tuple = constants.DEFAULT_FILTER_SIZES
    threshold_base: float = constants.DEFAULT_THRESHOLD_BASE
    cross_scale_margin: float = constants.DEFAULT_CROSS_SCALE_MARGIN
    cluster_radius_factor: float = constants.DEFAULT_CLUSTER_RADIUS_FACTOR
    base_filter_size: int = constants.BASE_FILTER_SIZE

    def __post_init__(self):
        base = self.base_filter_size
        if isinstance(base, bool) or not isinstance(base, numbers.Integral) or base < 1:
            raise InvalidConfigError(f"base_filter_size must be a positive integer, got {base!r}")

        try:
            sizes = tuple(self.filter_sizes)
        except TypeError:
            raise InvalidConfigError(
                f"filter_sizes must be a sequence, got {self.filter_sizes!r}"
            ) from None
        object.__setattr__(self, 'filter_sizes', sizes)

        if len(sizes) == 0:
            raise InvalidConfigError("filter_sizes must not be empty")

        for fs in sizes:
            if isinstance(fs, bool) or not isinstance(fs, numbers.Integral):
                raise InvalidConfigError(f"Filter size must be an integer, got {fs!r}")
            if fs < self.base_filter_size or fs % 2 == 0:
                raise InvalidConfigError(
                    f"Filter size must be odd and >= {self.base_filter_size}, got {fs}"
                )
        sizes = tuple(int(fs) for fs in sizes)
        object.__setattr__(self, 'filter_sizes', sizes)

        for smaller, larger in zip(sizes, sizes[1:]):
            if larger <= smaller:
                raise InvalidConfigError(
                    f"filter_sizes must be strictly ascending, got {list(sizes)}"
                )

        if not self.threshold_base > 0:
            raise InvalidConfigError(
                f"threshold_base must be positive, got {self.threshold_base}"
            )
        if not self.cross_scale_margin >= 1:
            raise InvalidConfigError(
                f"cross_scale_margin must be >= 1, got {self.cross_scale_margin}"
            )
        if not self.cluster_radius_factor > 0:
            raise InvalidConfigError(
                f"cluster_radius_factor must be positive, got {self.cluster_radius_factor}"
            )

    @classmethod
    def from_mapping(cls, values):
        """
        Build a config from a plain dictionary.

        Keys set to None fall back to the defaults, which lets CLI
        arguments be passed through unchanged.

        Args:
            values: Mapping of field name to value

        Returns:
            SurfConfig
        """
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise InvalidConfigError(f"Unknown config option(s): {sorted(unknown)}")
        return cls(**{k: v for k, v in values.items() if v is not None})

    def scale_levels(self):
        """Return one ScaleLevel per filter size, ascending."""
        return tuple(
            ScaleLevel(index=i, filter_size=fs, scale=fs / self.base_filter_size)
            for i, fs in enumerate(self.filter_sizes)
        )

    def threshold_for(self, filter_size):
        """Response threshold for one filter size."""
        return self.threshold_base * (self.base_filter_size / filter_size) ** 4
