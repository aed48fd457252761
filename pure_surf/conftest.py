import numpy as np
import pytest

from pure_surf.config import SurfConfig


@pytest.fixture
def default_config():
    return SurfConfig()


@pytest.fixture
def random_image():
    """64x64 seeded uniform noise in [0, 1]."""
    rng = np.random.default_rng(7)
    return rng.random((64, 64))


@pytest.fixture
def zero_image():
    return np.zeros((32, 32))


@pytest.fixture
def step_image():
    """Factory for a 40x40 image that is 1 on one side of a centered edge."""
    def make(bright_side):
        image = np.zeros((40, 40))
        if bright_side == 'left':
            image[:, :20] = 1.0
        elif bright_side == 'right':
            image[:, 20:] = 1.0
        elif bright_side == 'top':
            image[:20, :] = 1.0
        elif bright_side == 'bottom':
            image[20:, :] = 1.0
        else:
            raise ValueError(bright_side)
        return image
    return make
