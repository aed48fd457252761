"""
Tests for image I/O helpers and the command-line interface.
"""

import argparse

import numpy as np
import pytest
from PIL import Image

from pure_surf.image_io import equalize_histogram, load_features, read_grayscale, save_features
from pure_surf.surf import SURF
from pure_surf.surf_cli import main, parse_filter_sizes


@pytest.fixture
def noise_png(tmp_path):
    rng = np.random.default_rng(11)
    pixels = rng.integers(0, 256, size=(48, 56), dtype=np.uint8)
    path = tmp_path / 'noise.png'
    Image.fromarray(pixels).save(path)
    return path, pixels


class TestImageIO:

    def test_read_grayscale(self, noise_png):
        path, pixels = noise_png

        image = read_grayscale(path)

        assert image.shape == (48, 56)
        assert image.dtype == np.float64
        np.testing.assert_allclose(image, pixels / 255.0)

    def test_read_color_converts_to_gray(self, tmp_path):
        path = tmp_path / 'color.png'
        Image.new('RGB', (20, 10), color=(255, 0, 0)).save(path)

        image = read_grayscale(path)

        assert image.shape == (10, 20)
        assert 0.0 < image[0, 0] < 1.0

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(IOError):
            read_grayscale(tmp_path / 'missing.png')

    def test_equalize_histogram(self, random_image):
        image = random_image * 0.3 + 0.2

        equalized = equalize_histogram(image)

        assert equalized.shape == image.shape
        assert equalized.min() >= 0.0 and equalized.max() <= 1.0
        # Stretching the histogram widens the intensity range
        assert equalized.max() - equalized.min() > image.max() - image.min()

    def test_save_and_load_features(self, tmp_path, random_image):
        features = SURF().detect_and_compute(random_image)
        path = tmp_path / 'features.npz'

        save_features(path, features)
        data = load_features(path)

        np.testing.assert_array_equal(data['descriptors'], features.descriptors)
        np.testing.assert_array_equal(data['positions'], features.positions())
        assert data['orientations'].shape == (len(features),)


class TestCli:

    def test_parse_filter_sizes(self):
        assert parse_filter_sizes('9,15, 21') == (9, 15, 21)
        with pytest.raises(argparse.ArgumentTypeError):
            parse_filter_sizes('9,x')

    def test_writes_features(self, noise_png, tmp_path):
        path, _ = noise_png
        output = tmp_path / 'out' / 'features.npz'

        status = main([str(path), '-o', str(output), '--max-features', '5'])

        assert status == 0
        data = load_features(output)
        assert 0 < len(data['descriptors']) <= 5

    def test_equalize_and_options(self, noise_png, capsys):
        path, _ = noise_png

        status = main([str(path), '--equalize', '--filter-sizes', '9,15',
                       '--threshold', '0.002', '--cluster-radius-factor', '1.5'])

        assert status == 0
        assert 'Detected' in capsys.readouterr().out

    def test_missing_image(self, tmp_path):
        assert main([str(tmp_path / 'nope.png')]) == 1

    def test_invalid_config(self, noise_png):
        path, _ = noise_png

        assert main([str(path), '--filter-sizes', '8']) == 1
        assert main([str(path), '--cross-scale-margin', '0.5']) == 1

    def test_unreadable_image(self, tmp_path):
        path = tmp_path / 'broken.png'
        path.write_bytes(b'not an image')

        assert main([str(path)]) == 1

    def test_blank_image_succeeds(self, tmp_path, capsys):
        path = tmp_path / 'blank.png'
        Image.new('L', (32, 32), color=0).save(path)

        assert main([str(path)]) == 0
        assert 'No keypoints detected' in capsys.readouterr().out
