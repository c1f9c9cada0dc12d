"""
Stack manifest structure.

The manifest (``stack.xml``) describes the canvas size and a tree of named
stacks holding layers::

    <image w="64" h="64">
      <stack>
        <stack name="Root">
          <stack name="Eyes">
            <layer src="data/eyes.png" name="Eyes_Blue" visibility="visible"
                   x="10" y="10"/>
          </stack>
          <stack name="Body">
            <layer src="data/body.png" name="Body" x="0" y="0"/>
          </stack>
        </stack>
      </stack>
    </image>

Parsing validates the document against a strict schema, so missing or
malformed fields surface as :py:class:`~ora_tools.errors.ManifestError`
instead of failing later on an absent attribute.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Optional, TypeVar

from attrs import define, field

from ora_tools.constants import Tag, Visibility
from ora_tools.errors import ManifestError
from ora_tools.validators import instance_of, range_

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="StackTree")

_INTEGER = re.compile(r"^\s*[+-]?\d+\s*$")

#: Largest canvas side accepted from a manifest.
MAX_SIZE = 300000


@define(frozen=True)
class LayerDescriptor:
    """
    A leaf layer referencing a bitmap blob in the container.

    .. py:attribute:: source_ref

        Blob name inside the container, e.g. ``data/body.png``.

    .. py:attribute:: name

        Logical attribute or trait name of the layer.

    .. py:attribute:: visible

        Static visibility flag.

    .. py:attribute:: offset_x

        Horizontal paint offset in pixels.

    .. py:attribute:: offset_y

        Vertical paint offset in pixels.
    """

    source_ref: str = field(validator=instance_of(str))
    name: str = field(default="", validator=instance_of(str))
    visible: bool = field(default=True, validator=instance_of(bool))
    offset_x: int = field(default=0, validator=instance_of(int))
    offset_y: int = field(default=0, validator=instance_of(int))

    @property
    def offset(self) -> tuple[int, int]:
        """(x, y) tuple of the paint offset."""
        return self.offset_x, self.offset_y

    @classmethod
    def fromelement(cls, elem: ET.Element) -> "LayerDescriptor":
        source_ref = elem.get(Tag.SOURCE.value)
        if source_ref is None:
            raise ManifestError(
                "Layer %r has no %r attribute"
                % (elem.get(Tag.NAME.value, ""), Tag.SOURCE.value)
            )
        visibility = elem.get(Tag.VISIBILITY.value, Visibility.VISIBLE.value)
        return cls(
            source_ref=source_ref,
            name=elem.get(Tag.NAME.value, ""),
            visible=visibility == Visibility.VISIBLE.value,
            offset_x=_read_int(elem, Tag.X.value, 0),
            offset_y=_read_int(elem, Tag.Y.value, 0),
        )


@define(frozen=True)
class StackNode:
    """
    A named grouping node that may contain further stacks and layers.

    Names are unique among siblings only; the same name may appear again in
    a different branch.
    """

    name: str = field(default="", validator=instance_of(str))
    children: tuple["StackNode", ...] = field(factory=tuple, converter=tuple)
    layers: tuple[LayerDescriptor, ...] = field(factory=tuple, converter=tuple)

    @classmethod
    def fromelement(cls, elem: ET.Element) -> "StackNode":
        # Nodes are built bottom-up from an explicit stack so that nesting
        # depth is not bounded by the interpreter recursion limit.
        built: dict[int, "StackNode"] = {}
        pending = [(elem, False)]
        while pending:
            current, expanded = pending.pop()
            substacks = current.findall(Tag.STACK.value)
            if not expanded:
                pending.append((current, True))
                pending.extend((child, False) for child in reversed(substacks))
                continue
            built[id(current)] = cls(
                name=current.get(Tag.NAME.value, ""),
                children=[built.pop(id(child)) for child in substacks],
                layers=[
                    LayerDescriptor.fromelement(child)
                    for child in current.findall(Tag.LAYER.value)
                ],
            )
        return built[id(elem)]

    def __repr__(self) -> str:
        return "%s(name=%r, children=%d, layers=%d)" % (
            self.__class__.__name__,
            self.name,
            len(self.children),
            len(self.layers),
        )

    def _repr_pretty_(self, p: Any, cycle: bool) -> None:
        if cycle:
            p.text("{name}(...)".format(name=self.__class__.__name__))
            return

        prefix = "{name}({value!r}".format(
            name=self.__class__.__name__, value=self.name
        )
        with p.group(2, prefix, ")"):
            for item in self.layers + self.children:
                p.text(",")
                p.breakable()
                p.pretty(item)
            p.breakable("")


@define(frozen=True)
class StackTree:
    """
    Parsed manifest: declared canvas size and the top-level stack.

    Example::

        from ora_tools.ora.manifest import StackTree

        tree = StackTree.frombytes(b'<image w="4" h="4"><stack/></image>')
        assert tree.size == (4, 4)

    .. py:attribute:: width

        Declared canvas width in pixels.

    .. py:attribute:: height

        Declared canvas height in pixels.

    .. py:attribute:: stack

        The top-level :py:class:`StackNode`.
    """

    width: int = field(validator=range_(1, MAX_SIZE))
    height: int = field(validator=range_(1, MAX_SIZE))
    stack: StackNode = field(factory=StackNode, validator=instance_of(StackNode))

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return self.width, self.height

    @classmethod
    def frombytes(cls: type[T], data: bytes) -> T:
        return parse(data, cls)


def parse(data: bytes, cls: Optional[type[T]] = None) -> T:
    """
    Parse manifest bytes into a :py:class:`StackTree`.

    :param data: raw ``stack.xml`` bytes.
    :raises ManifestError: when the document is not well formed, the root
        element is not ``image``, or a numeric field is missing or malformed.
    :return: :py:class:`StackTree`
    """
    cls = cls or StackTree  # type: ignore[assignment]
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise ManifestError("Invalid manifest XML: %s" % e) from e

    if root.tag != Tag.IMAGE.value:
        raise ManifestError(
            "No %r element found in manifest, got %r" % (Tag.IMAGE.value, root.tag)
        )

    width = _read_int(root, Tag.WIDTH.value)
    height = _read_int(root, Tag.HEIGHT.value)
    top = root.find(Tag.STACK.value)
    stack = StackNode.fromelement(top) if top is not None else StackNode()
    try:
        tree = cls(width=width, height=height, stack=stack)  # type: ignore[misc]
    except ValueError as e:
        raise ManifestError("Invalid image size: %s" % e) from e
    logger.debug("Parsed manifest %dx%d" % (tree.width, tree.height))
    return tree  # type: ignore[return-value]


def _read_int(elem: ET.Element, key: str, default: Optional[int] = None) -> int:
    value = elem.get(key)
    if value is None:
        if default is None:
            raise ManifestError(
                "Missing %r attribute on <%s> element" % (key, elem.tag)
            )
        return default
    if not _INTEGER.match(value):
        raise ManifestError(
            "Malformed %r attribute on <%s> element: %r" % (key, elem.tag, value)
        )
    return int(value)
