"""Composite implementation for layer rendering."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Sequence

import numpy as np
from PIL import Image

from ora_tools.api import pil_io
from ora_tools.composite import utils
from ora_tools.composite.blend import source_over
from ora_tools.constants import MIN_LAYERS
from ora_tools.errors import InsufficientLayersError
from ora_tools.ora.manifest import LayerDescriptor

logger = logging.getLogger(__name__)

LayerEntry = tuple[LayerDescriptor, bytes]


def composite_pil(
    layers: Sequence[LayerEntry],
    width: int,
    height: int,
    workers: Optional[int] = None,
) -> Image.Image:
    """
    Composite layers and return an RGBA PIL Image.

    Args:
        layers: (descriptor, bitmap bytes) pairs in paint order; later entries
            paint over earlier ones
        width: Canvas width in pixels
        height: Canvas height in pixels
        workers: Number of threads decoding bitmaps. Painting always runs
            sequentially in input order

    Returns:
        PIL Image of exactly width x height pixels

    Raises:
        InsufficientLayersError: fewer than two layers are given
        BitmapDecodeError: a layer's bytes are not a valid bitmap
    """
    if len(layers) < MIN_LAYERS:
        raise InsufficientLayersError(len(layers), MIN_LAYERS)

    compositor = Compositor((0, 0, width, height))
    for (descriptor, _), image in zip(layers, decode_layers(layers, workers)):
        compositor.apply(image, descriptor.offset, descriptor.source_ref)
    color, alpha = compositor.finish()
    return pil_io.convert_array_to_pil(color, alpha)


def composite(
    layers: Sequence[LayerEntry],
    width: int,
    height: int,
    workers: Optional[int] = None,
) -> bytes:
    """
    Composite layers and return PNG bytes.

    See :py:func:`composite_pil` for the arguments.

    Example::

        data = composite(
            [(body, container.get(body.source_ref)),
             (eyes, container.get(eyes.source_ref))],
            64, 64,
        )
    """
    return pil_io.encode_png(composite_pil(layers, width, height, workers))


def decode_layers(
    layers: Sequence[LayerEntry], workers: Optional[int] = None
) -> Iterable[Image.Image]:
    """
    Decode layer bitmaps in input order.

    With more than one worker all bitmaps are decoded up front in a thread
    pool; otherwise they are decoded lazily one at a time.
    """

    def _decode(entry: LayerEntry) -> Image.Image:
        descriptor, data = entry
        return pil_io.decode_bitmap(data, descriptor.source_ref)

    if workers is not None and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(_decode, layers))
    return (_decode(entry) for entry in layers)


class Compositor(object):
    """Composite context over a transparent canvas.

    Example::

        compositor = Compositor((0, 0, width, height))
        for image, offset in layers:
            compositor.apply(image, offset)
        color, alpha = compositor.finish()
    """

    def __init__(self, viewport: tuple[int, int, int, int]):
        self._viewport = viewport
        self._color = np.zeros((self.height, self.width, 3), dtype=np.float32)
        self._alpha = np.zeros((self.height, self.width, 1), dtype=np.float32)

    def apply(
        self,
        image: Image.Image,
        offset: tuple[int, int] = (0, 0),
        name: str = "",
    ) -> None:
        """Paint `image` with its top-left corner at `offset`."""
        left = offset[0] - self._viewport[0]
        top = offset[1] - self._viewport[1]
        bbox = (left, top, left + image.width, top + image.height)
        inter = utils.intersect((0, 0, self.width, self.height), bbox)
        if inter == (0, 0, 0, 0):
            logger.warning("Layer %s out of canvas at %s" % (name, offset))
            return
        logger.debug("Compositing %s at %s" % (name, offset))

        color_s, alpha_s = pil_io.get_array(image)
        src = (inter[0] - left, inter[1] - top, inter[2] - left, inter[3] - top)
        color_s = color_s[src[1] : src[3], src[0] : src[2], :]
        alpha_s = alpha_s[src[1] : src[3], src[0] : src[2], :]

        region = (slice(inter[1], inter[3]), slice(inter[0], inter[2]))
        color, alpha = source_over(
            self._color[region], self._alpha[region], color_s, alpha_s
        )
        self._color[region] = color
        self._alpha[region] = alpha

    def finish(self) -> tuple[np.ndarray, np.ndarray]:
        return self.color, self.alpha

    @property
    def viewport(self) -> tuple[int, int, int, int]:
        return self._viewport

    @property
    def width(self) -> int:
        return self._viewport[2] - self._viewport[0]

    @property
    def height(self) -> int:
        return self._viewport[3] - self._viewport[1]

    @property
    def color(self) -> np.ndarray:
        return self._color

    @property
    def alpha(self) -> np.ndarray:
        return self._alpha
