"""
ORA Image module.

This module provides the main :py:class:`ORAImage` class, the primary entry
point of ora-tools. It wraps an OpenRaster container and its parsed stack
manifest, and renders selected layers into a single image.

Key functionality:

- **Opening files**: :py:meth:`ORAImage.open`
- **Layer selection**: :py:meth:`ORAImage.layers` by visibility or attributes
- **Rendering**: :py:meth:`ORAImage.render` and :py:meth:`ORAImage.composite`
- **Random entries**: :py:meth:`ORAImage.random_entry`

Example usage::

    from ora_tools import ORAImage

    with ORAImage.open('arcadians.ora') as ora:
        print(f"Size: {ora.width}x{ora.height}")

        # Visible layers only
        png = ora.render()

        # Layers matching trait values
        png = ora.render(attributes=['Body_Green', 'Eyes_Blue'])
"""

import logging
import os
import random
from typing import Any, BinaryIO, Iterable, Optional, Union

try:
    from typing import Self  # type: ignore[attr-defined]
except ImportError:
    from typing_extensions import Self

from PIL import Image

from ora_tools.api.selection import SelectionCriterion, paint_order, select_layers
from ora_tools.composite import composite, composite_pil
from ora_tools.constants import DATA_PREFIX, MANIFEST_NAME, MIN_LAYERS
from ora_tools.errors import InsufficientLayersError, NotFoundError
from ora_tools.ora.container import Container, ZipContainer
from ora_tools.ora.manifest import LayerDescriptor, StackTree

logger = logging.getLogger(__name__)


class ORAImage:
    """
    OpenRaster document.

    The parsed manifest is accessible at :py:attr:`ORAImage.manifest`.

    Example::

        from ora_tools import ORAImage

        ora = ORAImage.open('example.ora')
        image = ora.composite()
        image.save('output.png')
    """

    def __init__(self, container: Container):
        if not isinstance(container, Container):
            raise TypeError(
                f"Expected Container instance, got {type(container).__name__}"
            )
        self._container = container
        self._manifest = StackTree.frombytes(container.get(MANIFEST_NAME))

    @classmethod
    def open(cls, fp: Union[BinaryIO, str, bytes, os.PathLike]) -> Self:
        """
        Open an OpenRaster document.

        :param fp: filename or file-like object.
        :raises NotFoundError: if the file, or its manifest, does not exist.
        :raises ManifestError: if the manifest is malformed.
        :return: A :py:class:`~ora_tools.api.ora_image.ORAImage` object.
        """
        container = ZipContainer(fp)
        try:
            return cls(container)
        except Exception:
            container.close()
            raise

    def close(self) -> None:
        """Release the underlying container."""
        close = getattr(self._container, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def container(self) -> Container:
        """Underlying blob store."""
        return self._container

    @property
    def manifest(self) -> StackTree:
        """Parsed :py:class:`~ora_tools.ora.manifest.StackTree`."""
        return self._manifest

    @property
    def width(self) -> int:
        """Declared canvas width."""
        return self._manifest.width

    @property
    def height(self) -> int:
        """Declared canvas height."""
        return self._manifest.height

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return self._manifest.size

    def layers(
        self,
        criterion: Optional[SelectionCriterion] = None,
        strict: bool = False,
    ) -> list[LayerDescriptor]:
        """
        Selected layers in manifest order, topmost stack first.

        :param criterion: :py:class:`~ora_tools.api.selection.SelectionCriterion`,
            default selects visible layers.
        :param strict: fail on sub-stack names that do not resolve.
        """
        return select_layers(
            self._manifest, criterion or SelectionCriterion.static(), strict
        )

    def render(
        self,
        attributes: Optional[Iterable[str]] = None,
        strict: bool = False,
        workers: Optional[int] = None,
    ) -> bytes:
        """
        Render selected layers to PNG bytes.

        :param attributes: attribute values to match against layer names.
            `None` selects visible layers instead.
        :param strict: fail on sub-stack names that do not resolve.
        :param workers: number of threads decoding bitmaps.
        :raises InsufficientLayersError: if fewer than two layers are selected.
        :return: PNG bytes of the declared size.
        """
        return composite(self._fetch(attributes, strict), *self.size, workers=workers)

    def composite(
        self,
        attributes: Optional[Iterable[str]] = None,
        strict: bool = False,
        workers: Optional[int] = None,
    ) -> Image.Image:
        """
        Render selected layers to a PIL Image.

        See :py:meth:`render` for the arguments.
        """
        return composite_pil(
            self._fetch(attributes, strict), *self.size, workers=workers
        )

    def random_entry(self, rng: random.Random, prefix: str = DATA_PREFIX) -> bytes:
        """
        Return the bytes of a uniformly chosen entry under `prefix`.

        :param rng: source of randomness, e.g. ``random.Random(seed)``.
        :raises NotFoundError: if no entry is under `prefix`.
        """
        names = [name for name in self._container.list() if name.startswith(prefix)]
        if not names:
            raise NotFoundError("No entries found under %r" % prefix)
        name = rng.choice(names)
        logger.debug("Picked %s of %d entries" % (name, len(names)))
        return self._container.get(name)

    def _fetch(
        self, attributes: Optional[Iterable[str]], strict: bool
    ) -> list[tuple[LayerDescriptor, bytes]]:
        if attributes is None:
            criterion = SelectionCriterion.static()
        else:
            criterion = SelectionCriterion.dynamic(attributes)
        layers = paint_order(self.layers(criterion, strict))
        if len(layers) < MIN_LAYERS:
            raise InsufficientLayersError(len(layers), MIN_LAYERS)
        return [(layer, self._container.get(layer.source_ref)) for layer in layers]

    def __repr__(self) -> str:
        return "%s(size=%dx%d, container=%r)" % (
            self.__class__.__name__,
            self.width,
            self.height,
            self._container,
        )

    def _repr_pretty_(self, p: Any, cycle: bool) -> None:
        if cycle:
            p.text(self.__repr__())
            return

        with p.group(2, "{name}(".format(name=self.__class__.__name__), ")"):
            p.breakable("")
            p.text("size=%dx%d," % self.size)
            p.breakable()
            p.pretty(self._manifest.stack)
            p.breakable("")
