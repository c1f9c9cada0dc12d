"""
PIL IO module.
"""

import io
import logging

import numpy as np
from PIL import Image

from ora_tools.errors import BitmapDecodeError

logger = logging.getLogger(__name__)


def decode_bitmap(data: bytes, source_ref: str = "") -> Image.Image:
    """
    Decode layer bytes into an RGBA PIL Image.

    :param data: encoded bitmap, usually PNG.
    :param source_ref: entry name, reported on failure.
    :raises BitmapDecodeError: if the bytes are not a valid bitmap.
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise BitmapDecodeError(source_ref, str(e)) from e
    if image.mode != "RGBA":
        logger.debug("Converting %s from %s to RGBA" % (source_ref, image.mode))
        image = image.convert("RGBA")
    return image


def get_array(image: Image.Image) -> tuple[np.ndarray, np.ndarray]:
    """
    Split an RGBA image into float32 color and alpha arrays in [0, 1].

    :return: (color, alpha) of shapes (height, width, 3) and (height, width, 1).
    """
    array = np.asarray(image.convert("RGBA"), dtype=np.float32) / 255.0
    return array[:, :, :3], array[:, :, 3:]


def convert_array_to_pil(color: np.ndarray, alpha: np.ndarray) -> Image.Image:
    """Merge float color and alpha arrays into an RGBA PIL Image."""
    array = np.concatenate((color, alpha), axis=2)
    array = np.round(np.clip(array, 0.0, 1.0) * 255.0).astype(np.uint8)
    return Image.fromarray(array)


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG, keeping the alpha channel."""
    with io.BytesIO() as f:
        image.save(f, format="PNG")
        return f.getvalue()
