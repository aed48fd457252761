"""
Pure implementation of SURF feature detection without OpenCV.

This package detects scale- and rotation-invariant keypoints in a
grayscale image and describes each one with a 64-dimensional vector,
using only NumPy, SciPy, and Pillow (no OpenCV).

Main components:
- Integral image: O(1) box sums
- HessianDetector: box-filter Hessian determinant over several filter sizes
- Suppression: cross-scale veto and spatial clustering removal
- OrientationEstimator: Gaussian-weighted Haar wavelet orientation
- DescriptorBuilder: 4x4 sub-regions of Haar sums

Example usage:
    from pure_surf.image_io import read_grayscale
    from pure_surf import SURF

    image = read_grayscale('scene.png')
    features = SURF(threshold_base=0.001).detect_and_compute(image)
    for keypoint, descriptor in features:
        print(keypoint.pt, keypoint.orientation)
"""

__version__ = '1.0.0'
__author__ = 'Pure Panorama Team'

from .config import SurfConfig
from .errors import SurfError, InvalidInputError, InvalidConfigError
from .types import ScaleLevel, Candidate, Keypoint, DetectionResult, FeatureSet
from .integral_image import integral_image, box_sum, box_sums
from .detector import HessianDetector
from .suppression import cross_scale_suppression, remove_clustered_keypoints, suppress
from .orientation import OrientationEstimator
from .descriptor import DescriptorBuilder
from .surf import SURF, detect_and_compute
from .image_io import read_grayscale, equalize_histogram, save_features, load_features

__all__ = [
    'SURF',
    'detect_and_compute',
    'SurfConfig',
    'SurfError',
    'InvalidInputError',
    'InvalidConfigError',
    'ScaleLevel',
    'Candidate',
    'Keypoint',
    'DetectionResult',
    'FeatureSet',
    'integral_image',
    'box_sum',
    'box_sums',
    'HessianDetector',
    'cross_scale_suppression',
    'remove_clustered_keypoints',
    'suppress',
    'OrientationEstimator',
    'DescriptorBuilder',
    'read_grayscale',
    'equalize_histogram',
    'save_features',
    'load_features',
]
