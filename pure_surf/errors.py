"""
Exceptions raised by the SURF pipeline.

An image that simply yields no keypoints is not an error: the pipeline
returns an empty FeatureSet in that case.
"""


class SurfError(Exception):
    """Base class for all pipeline errors."""


class InvalidInputError(SurfError, ValueError):
    """The image is empty, wrongly shaped, non-finite or out of range."""


class InvalidConfigError(SurfError, ValueError):
    """A configuration option is outside its recognized domain."""
