"""
Tests for the integral image and box sums.
"""

import numpy as np
import pytest

from pure_surf.errors import InvalidInputError
from pure_surf.integral_image import box_sum, box_sums, integral_image, validate_image


@pytest.fixture
def small_image():
    return np.arange(12, dtype=np.float64).reshape(3, 4) / 11.0


class TestIntegralImage:
    """Tests for integral_image()."""

    def test_shape_and_padding(self, small_image):
        table = integral_image(small_image)

        assert table.shape == (4, 5)
        assert np.all(table[0, :] == 0)
        assert np.all(table[:, 0] == 0)

    def test_cells_hold_prefix_sums(self, small_image):
        table = integral_image(small_image)

        assert table[-1, -1] == pytest.approx(small_image.sum())
        assert table[2, 3] == pytest.approx(small_image[:2, :3].sum())
        assert table[1, 4] == pytest.approx(small_image[:1, :].sum())

    def test_monotonic_along_both_axes(self, random_image):
        table = integral_image(random_image)

        assert np.all(np.diff(table, axis=0) >= 0)
        assert np.all(np.diff(table, axis=1) >= 0)

    def test_read_only(self, small_image):
        table = integral_image(small_image)

        with pytest.raises(ValueError):
            table[1, 1] = 5.0

    def test_accepts_nested_lists(self):
        table = integral_image([[0.5]])

        np.testing.assert_array_equal(table, [[0.0, 0.0], [0.0, 0.5]])


class TestValidation:
    """Malformed images are rejected before any processing."""

    @pytest.mark.parametrize("image", [
        np.zeros((0, 5)),
        np.zeros((4, 4, 3)),
        np.zeros(10),
        np.array([[0.1, np.nan]]),
        np.array([[0.1, np.inf]]),
        np.array([[0.1, 1.5]]),
        np.array([[-0.2, 0.5]]),
        [["a", "b"]],
    ])
    def test_invalid_images(self, image):
        with pytest.raises(InvalidInputError):
            integral_image(image)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            validate_image(np.zeros((0, 0)))

    def test_clips_rounding_noise(self):
        """Values a hair outside [0, 1] are clipped instead of rejected."""
        image = validate_image(np.array([[1.0000000002, 0.5], [-1e-9, 0.25]]))

        assert image.max() == 1.0
        assert image.min() == 0.0
        assert image[0, 1] == 0.5

    def test_rejects_beyond_tolerance(self):
        with pytest.raises(InvalidInputError):
            validate_image(np.array([[0.5, 1.001]]))

    def test_returns_float_copy(self):
        source = np.ones((2, 2), dtype=np.uint8)
        image = validate_image(source)

        assert image.dtype == np.float64
        image[0, 0] = 0
        assert source[0, 0] == 1


class TestBoxSum:
    """Tests for clamped rectangle sums."""

    def test_full_image(self, small_image):
        table = integral_image(small_image)

        assert box_sum(table, 0, 0, 3, 2) == pytest.approx(small_image.sum())

    def test_single_pixel(self, small_image):
        table = integral_image(small_image)

        assert box_sum(table, 1, 2, 1, 2) == pytest.approx(small_image[2, 1])

    def test_partially_outside_is_truncated(self, small_image):
        table = integral_image(small_image)

        assert box_sum(table, -5, -5, 1, 1) == pytest.approx(small_image[:2, :2].sum())
        assert box_sum(table, 2, 0, 10, 10) == pytest.approx(small_image[:, 2:].sum())

    def test_entirely_outside_is_zero(self, small_image):
        table = integral_image(small_image)

        assert box_sum(table, 10, 10, 12, 12) == 0.0
        assert box_sum(table, -6, 0, -2, 2) == 0.0

    def test_vectorized_matches_scalar(self, random_image):
        table = integral_image(random_image)
        rng = np.random.default_rng(3)
        x1 = rng.integers(-5, 60, size=20)
        y1 = rng.integers(-5, 60, size=20)
        x2 = x1 + rng.integers(0, 15, size=20)
        y2 = y1 + rng.integers(0, 15, size=20)

        sums = box_sums(table, x1, y1, x2, y2)

        expected = [box_sum(table, a, b, c, d) for a, b, c, d in zip(x1, y1, x2, y2)]
        np.testing.assert_allclose(sums, expected)

    def test_matches_direct_sum(self, random_image):
        table = integral_image(random_image)

        assert box_sum(table, 5, 7, 20, 30) == pytest.approx(random_image[7:31, 5:21].sum())
