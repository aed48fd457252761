"""
SURF (Speeded-Up Robust Features) pipeline
built on NumPy and SciPy - no OpenCV dependencies.
"""

import logging
from dataclasses import asdict

from .config import SurfConfig
from .descriptor import DescriptorBuilder
from .detector import HessianDetector
from .integral_image import integral_image
from .orientation import OrientationEstimator
from .suppression import suppress
from .types import FeatureSet

logger = logging.getLogger(__name__)


class SURF:
    """
    Speeded-Up Robust Features detector and descriptor.

    This class runs the full pipeline:
    1. Integral image
    2. Multi-scale Hessian detection
    3. Cross-scale and spatial suppression
    4. Orientation assignment
    5. 64-dimensional descriptor
    """

    def __init__(self, config=None, **overrides):
        """
        Initialize SURF.

        Args:
            config: SurfConfig, defaults to SurfConfig()
            **overrides: SurfConfig fields replacing values of config,
                e.g. filter_sizes=(9, 15) or threshold_base=0.01
        """
        if config is None:
            config = SurfConfig.from_mapping(overrides)
        elif overrides:
            values = asdict(config)
            values.update(overrides)
            config = SurfConfig.from_mapping(values)

        self.config = config
        self.detector = HessianDetector(config)
        self.orientation_estimator = OrientationEstimator()
        self.descriptor_builder = DescriptorBuilder()

    def detect(self, image):
        """
        Detect and suppress candidates without orienting them.

        Args:
            image: Grayscale image (2D array, values in [0, 1])

        Returns:
            Tuple of Candidate, scale-ascending then discovery order
        """
        integral = integral_image(image)
        return self._detect(integral)

    def detect_and_compute(self, image):
        """
        Detect keypoints and compute descriptors.

        Args:
            image: Grayscale image (2D array, values in [0, 1])

        Returns:
            FeatureSet; empty when nothing survives thresholding

        Raises:
            InvalidInputError: If the image is empty, not 2D, non-finite
                or not normalized
        """
        integral = integral_image(image)
        candidates = self._detect(integral)

        if not candidates:
            logger.info("No keypoints detected")
            return FeatureSet.empty(self.descriptor_builder.length)

        logger.debug("Assigning orientations to %d keypoints...", len(candidates))
        keypoints = self.orientation_estimator.assign(integral, candidates)

        logger.debug("Generating descriptors...")
        descriptors = self.descriptor_builder.compute_all(integral, keypoints)

        logger.info("Detected %d keypoints", len(keypoints))
        return FeatureSet(keypoints=keypoints, descriptors=descriptors)

    def _detect(self, integral):
        logger.debug("Building response maps for filter sizes %s...",
                     list(self.config.filter_sizes))
        detection = self.detector.detect(integral)
        return suppress(detection, self.config)


def detect_and_compute(image, config=None):
    """Run the SURF pipeline once with the given (or default) config."""
    return SURF(config).detect_and_compute(image)
