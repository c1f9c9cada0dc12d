"""
Low-level API that translates OpenRaster containers and manifests to Python
structures.
"""

from .container import (
    Container as Container,
    MappingContainer as MappingContainer,
    ZipContainer as ZipContainer,
)
from .manifest import (
    LayerDescriptor as LayerDescriptor,
    StackNode as StackNode,
    StackTree as StackTree,
    parse as parse,
)

__all__ = [
    "Container",
    "ZipContainer",
    "MappingContainer",
    "StackTree",
    "StackNode",
    "LayerDescriptor",
    "parse",
]
