"""
Various constants for ora_tools
"""

from enum import Enum

#: Name of the manifest entry inside an OpenRaster container.
MANIFEST_NAME = "stack.xml"

#: Prefix of the bitmap entries inside an OpenRaster container.
DATA_PREFIX = "data/"

#: Minimum number of layers a render must composite.
MIN_LAYERS = 2


class Visibility(str, Enum):
    """
    Layer visibility attribute values.

    Anything other than ``visible`` hides the layer.
    """

    VISIBLE = "visible"
    HIDDEN = "hidden"


class SelectionMode(str, Enum):
    """
    Layer selection modes.

    .. py:attribute:: STATIC

        Keep layers whose visibility flag is set.

    .. py:attribute:: DYNAMIC

        Keep layers whose name is in a caller-supplied attribute set.
    """

    STATIC = "static"
    DYNAMIC = "dynamic"


class Tag(str, Enum):
    """
    Element and attribute names of the stack manifest.
    """

    IMAGE = "image"
    STACK = "stack"
    LAYER = "layer"
    WIDTH = "w"
    HEIGHT = "h"
    NAME = "name"
    SOURCE = "src"
    VISIBILITY = "visibility"
    X = "x"
    Y = "y"
