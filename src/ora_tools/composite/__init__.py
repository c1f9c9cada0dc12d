"""
Composite module for layer rendering.

This subpackage paints decoded layer bitmaps onto a transparent canvas with
source-over alpha compositing and encodes the result.

Key modules:

- :py:mod:`ora_tools.composite.composite`: Main compositing functions
- :py:mod:`ora_tools.composite.blend`: Source-over operator

Example usage::

    from ora_tools.composite import composite

    png = composite([(body, body_png), (eyes, eyes_png)], 64, 64)

Layers paint in input order, so later entries end up on top. Canvas arrays
are float32 in [0, 1] and are converted to 8-bit only when encoding.
"""

from ora_tools.composite.composite import Compositor, composite, composite_pil

__all__ = [
    "Compositor",
    "composite",
    "composite_pil",
]
