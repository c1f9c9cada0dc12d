"""
ora-tools: Python package for compositing layered OpenRaster images.

An OpenRaster (``.ora``) file is a zip archive holding layer bitmaps and a
``stack.xml`` manifest that arranges them in a tree of named stacks. This
package selects layers from that tree, either by their visibility flag or by
matching a set of attribute values such as token traits, and composites them
into one PNG.

Basic usage::

    from ora_tools import ORAImage

    with ORAImage.open('example.ora') as ora:
        png = ora.render(attributes=['Body_Green', 'Eyes_Blue'])

Architecture:

- :py:mod:`ora_tools.ora`: Containers and the manifest structure
- :py:mod:`ora_tools.api`: High-level user-facing API (primary interface)
- :py:mod:`ora_tools.composite`: Layer compositing engine
"""

from ora_tools.api.ora_image import ORAImage
from ora_tools.version import __version__

__all__ = ["ORAImage", "__version__"]
