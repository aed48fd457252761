"""
Image and feature I/O utilities using PIL (Pillow)
No OpenCV dependencies.
"""

import numpy as np
from PIL import Image, ImageOps


def read_grayscale(filepath):
    """
    Read an image file as normalized grayscale.

    Args:
        filepath: Path to image file

    Returns:
        Image as float64 numpy array (H x W) with values in [0, 1]
    """
    try:
        img = Image.open(filepath)

        # Luminance conversion for color, palette and 16-bit images
        if img.mode != 'L':
            img = img.convert('L')

        img_array = np.asarray(img, dtype=np.float64) / 255.0

        return img_array

    except Exception as e:
        raise IOError(f"Failed to read image from {filepath}: {str(e)}")


def equalize_histogram(image):
    """
    Histogram-equalize a normalized grayscale image.

    Args:
        image: 2D array with values in [0, 1]

    Returns:
        Equalized image with values in [0, 1]
    """
    quantized = np.clip(np.round(np.asarray(image) * 255.0), 0, 255).astype(np.uint8)
    img = Image.fromarray(quantized)
    equalized = ImageOps.equalize(img)
    return np.asarray(equalized, dtype=np.float64) / 255.0


def save_features(filepath, features):
    """
    Write keypoints and descriptors to a .npz archive.

    Args:
        filepath: Output path
        features: FeatureSet
    """
    try:
        np.savez(filepath, **features.as_arrays())
    except Exception as e:
        raise IOError(f"Failed to write features to {filepath}: {str(e)}")


def load_features(filepath):
    """
    Read an archive written by save_features().

    Returns:
        Dictionary of arrays (positions, scales, orientations, responses,
        filter_sizes, descriptors)
    """
    try:
        with np.load(filepath) as data:
            return {key: data[key] for key in data.files}
    except Exception as e:
        raise IOError(f"Failed to read features from {filepath}: {str(e)}")
