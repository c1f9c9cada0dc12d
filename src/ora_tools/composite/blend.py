"""
Source-over alpha compositing.

Colors are straight (not premultiplied) float arrays in [0, 1].
"""

import logging

import numpy as np

from ora_tools.composite import utils

logger = logging.getLogger(__name__)


def source_over(
    color_b: np.ndarray,
    alpha_b: np.ndarray,
    color_s: np.ndarray,
    alpha_s: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Paint the source over the backdrop.

    ``alpha = As + Ab * (1 - As)`` and
    ``color * alpha = Cs * As + Cb * Ab * (1 - As)``.

    :return: (color, alpha) of the result, clipped to [0, 1].
    """
    alpha = utils.union(alpha_b, alpha_s)
    color = alpha_s * color_s + (1.0 - alpha_s) * alpha_b * color_b
    return utils.clip(utils.divide(color, alpha)), utils.clip(alpha)
