import logging

import numpy as np
import pytest

from ora_tools.composite import utils
from ora_tools.composite.blend import source_over

logger = logging.getLogger(__name__)


def _pixel(*values: float) -> np.ndarray:
    return np.array(values, dtype=np.float32).reshape((1, 1, -1))


def test_source_over_opaque_source() -> None:
    color, alpha = source_over(
        _pixel(0.2, 0.4, 0.6), _pixel(1.0), _pixel(0.9, 0.1, 0.0), _pixel(1.0)
    )
    np.testing.assert_allclose(color, _pixel(0.9, 0.1, 0.0), atol=1e-6)
    np.testing.assert_allclose(alpha, _pixel(1.0), atol=1e-6)


def test_source_over_transparent_source() -> None:
    color, alpha = source_over(
        _pixel(0.2, 0.4, 0.6), _pixel(0.5), _pixel(0.9, 0.1, 0.0), _pixel(0.0)
    )
    np.testing.assert_allclose(color, _pixel(0.2, 0.4, 0.6), atol=1e-6)
    np.testing.assert_allclose(alpha, _pixel(0.5), atol=1e-6)


def test_source_over_empty() -> None:
    color, alpha = source_over(
        _pixel(0.0, 0.0, 0.0), _pixel(0.0), _pixel(1.0, 1.0, 1.0), _pixel(0.0)
    )
    assert not color.any()
    assert not alpha.any()


@pytest.mark.parametrize(
    "alpha_b, alpha_s",
    [(0.25, 0.5), (1.0, 0.3), (0.6, 0.6)],
)
def test_source_over_formula(alpha_b: float, alpha_s: float) -> None:
    color_b, color_s = 0.8, 0.1
    color, alpha = source_over(
        _pixel(color_b), _pixel(alpha_b), _pixel(color_s), _pixel(alpha_s)
    )
    expected_alpha = alpha_s + alpha_b * (1 - alpha_s)
    expected_color = (
        color_s * alpha_s + color_b * alpha_b * (1 - alpha_s)
    ) / expected_alpha
    np.testing.assert_allclose(alpha, _pixel(expected_alpha), atol=1e-6)
    np.testing.assert_allclose(color, _pixel(expected_color), atol=1e-6)


def test_intersect() -> None:
    assert utils.intersect((0, 0, 4, 4), (2, 2, 6, 6)) == (2, 2, 4, 4)
    assert utils.intersect((0, 0, 4, 4), (4, 0, 6, 4)) == (0, 0, 0, 0)
    assert utils.intersect((0, 0, 4, 4), (-2, -2, 10, 10)) == (0, 0, 4, 4)


def test_divide() -> None:
    result = utils.divide(_pixel(1.0, 0.0), _pixel(2.0, 0.0))
    np.testing.assert_allclose(result, _pixel(0.5, 0.0))
