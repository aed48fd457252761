#!/usr/bin/env python3
"""
Pure SURF CLI
Command-line interface for SURF keypoint detection without OpenCV.

Usage:
    python -m pure_surf.surf_cli image.png [options]
"""

import sys
import os
import argparse
import logging
import time

from .config import SurfConfig
from .errors import SurfError
from .image_io import read_grayscale, equalize_histogram, save_features
from .surf import SURF


def print_banner():
    """Print banner."""
    banner = """
 ___ _   _ ___ ___
/ __| | | | _ \\ __|
\\__ \\ |_| |   / _|
|___/\\___/|_|_\\_|

Pure Implementation (No OpenCV)
    """
    print(banner)


def parse_filter_sizes(text):
    """Parse a comma-separated list of filter sizes."""
    try:
        return tuple(int(part) for part in text.split(',') if part.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Filter sizes must be comma-separated integers, got {text!r}"
        )


def build_parser():
    parser = argparse.ArgumentParser(
        description='Detect SURF keypoints and descriptors using a pure Python implementation'
    )

    parser.add_argument(
        'image',
        help='Input image'
    )

    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Write keypoints and descriptors to this .npz file'
    )

    parser.add_argument(
        '--filter-sizes',
        type=parse_filter_sizes,
        default=None,
        help='Comma-separated odd filter sizes (default: 9,15,21,27)'
    )

    parser.add_argument(
        '--threshold',
        type=float,
        default=None,
        help='Hessian threshold at the base scale (default: 0.001)'
    )

    parser.add_argument(
        '--cross-scale-margin',
        type=float,
        default=None,
        help='Veto multiplier for smaller-scale responses (default: 3.0)'
    )

    parser.add_argument(
        '--cluster-radius-factor',
        type=float,
        default=None,
        help='Spatial suppression radius per unit filter size (default: 2.0)'
    )

    parser.add_argument(
        '--equalize',
        action='store_true',
        help='Histogram-equalize the image before detection'
    )

    parser.add_argument(
        '--max-features',
        type=int,
        default=None,
        help='Keep only the N strongest keypoints'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Log pipeline progress (-v info, -vv debug)'
    )

    return parser


def print_summary(features, shown=5):
    """Print the strongest keypoints and the scale/response ranges."""
    if len(features) == 0:
        print("  No keypoints detected. Try lowering --threshold.")
        return

    top = features.strongest(shown)
    print(f"  Top keypoint details (up to {shown}):")
    for i, kp in enumerate(top.keypoints):
        print(f"    Keypoint {i + 1}: x={kp.x}, y={kp.y}, scale={kp.scale:.2f}, "
              f"orientation={kp.orientation:.2f} rad, response={kp.response:.6f}")

    columns = features.as_arrays()
    print(f"  Scale range: {columns['scales'].min():.2f} to {columns['scales'].max():.2f}")
    print(f"  Response range: {columns['responses'].min():.6f} "
          f"to {columns['responses'].max():.6f}")


def main(argv=None):
    """Main function for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(name)s %(levelname)s: %(message)s')

    # Print banner
    print_banner()

    if not os.path.exists(args.image):
        print(f"Error: Image not found: {args.image}")
        return 1

    if args.max_features is not None and args.max_features < 0:
        print("Error: --max-features must be non-negative")
        return 1

    try:
        config = SurfConfig.from_mapping({
            'filter_sizes': args.filter_sizes,
            'threshold_base': args.threshold,
            'cross_scale_margin': args.cross_scale_margin,
            'cluster_radius_factor': args.cluster_radius_factor,
        })
    except SurfError as e:
        print(f"Error: {str(e)}")
        return 1

    # Read image
    print("\nReading image...")
    try:
        image = read_grayscale(args.image)
    except IOError as e:
        print(f"Error reading image: {str(e)}")
        return 1
    print(f"  Image size: {image.shape[0]} x {image.shape[1]} pixels")
    print(f"  Intensity min/max: {image.min():.4f} / {image.max():.4f}")

    if args.equalize:
        image = equalize_histogram(image)

    start_time = time.time()

    try:
        features = SURF(config).detect_and_compute(image)
    except SurfError as e:
        print(f"\nError during detection: {str(e)}")
        return 1

    elapsed_time = time.time() - start_time

    detected = len(features)
    if args.max_features is not None:
        features = features.strongest(args.max_features)

    print(f"\nDetected {detected} keypoints (keeping {len(features)})")
    print_summary(features)

    if args.output:
        output_dir = os.path.dirname(args.output)
        if output_dir and not os.path.exists(output_dir):
            os.makedirs(output_dir)
        try:
            save_features(args.output, features)
        except IOError as e:
            print(f"Error saving features: {str(e)}")
            return 1
        print(f"\n  Features saved to: {args.output}")

    print(f"  Processing time: {elapsed_time:.2f} seconds")

    return 0


if __name__ == '__main__':
    sys.exit(main())
