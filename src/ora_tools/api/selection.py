"""
Layer selection.

Layers are collected from the sub-stacks of the root stack in manifest order,
which lists the visually topmost stack first, then filtered by a
:py:class:`SelectionCriterion`. Painting must run back to front, so callers
reverse the selection with :py:func:`paint_order` before compositing.
"""

import logging
from typing import Iterable, Sequence

from attrs import define, field

from ora_tools.api.resolver import find_substack, root_stack, root_substack_names
from ora_tools.constants import SelectionMode
from ora_tools.errors import NotFoundError
from ora_tools.ora.manifest import LayerDescriptor, StackTree
from ora_tools.validators import in_

logger = logging.getLogger(__name__)


def _attribute_set(attributes: Iterable[str]) -> frozenset[str]:
    if isinstance(attributes, (str, bytes)):
        raise TypeError(
            "Expected an iterable of attribute values, got %s"
            % type(attributes).__name__
        )
    return frozenset(attributes)


@define(frozen=True)
class SelectionCriterion:
    """
    Rule deciding which layers take part in a render.

    Example::

        criterion = SelectionCriterion.dynamic(["Eyes_Blue", "Body"])
        layers = [layer for layer in layers if criterion(layer)]

    In dynamic mode the visibility flag of the layer is not considered.
    """

    mode: SelectionMode = field(
        default=SelectionMode.STATIC,
        converter=SelectionMode,
        validator=in_(SelectionMode),
    )
    attributes: frozenset[str] = field(factory=frozenset, converter=_attribute_set)

    @classmethod
    def static(cls) -> "SelectionCriterion":
        return cls(SelectionMode.STATIC)

    @classmethod
    def dynamic(cls, attributes: Iterable[str]) -> "SelectionCriterion":
        return cls(SelectionMode.DYNAMIC, attributes)

    def __call__(self, layer: LayerDescriptor) -> bool:
        if self.mode == SelectionMode.DYNAMIC:
            return layer.name in self.attributes
        return layer.visible


def collect_layers(tree: StackTree, strict: bool = False) -> list[LayerDescriptor]:
    """
    Collect the direct layers of each root sub-stack in manifest order.

    :param strict: raise :py:class:`~ora_tools.errors.NotFoundError` when a
        sub-stack name does not resolve, instead of skipping it.
    :raises ManifestError: if the root stack is absent.
    """
    root = root_stack(tree)
    layers: list[LayerDescriptor] = []
    for name in root_substack_names(root):
        stack = find_substack(root, name)
        if stack is None:
            if strict:
                raise NotFoundError("Sub-stack not found: %s" % name)
            logger.debug("Skipping unresolved sub-stack %r" % name)
            continue
        layers.extend(stack.layers)
    return layers


def select_layers(
    tree: StackTree,
    criterion: SelectionCriterion,
    strict: bool = False,
) -> list[LayerDescriptor]:
    """
    Select layers from the manifest, keeping manifest order.

    :param tree: parsed manifest.
    :param criterion: :py:class:`SelectionCriterion` to apply.
    :param strict: see :py:func:`collect_layers`.
    :return: list of :py:class:`~ora_tools.ora.manifest.LayerDescriptor`.
    """
    layers = collect_layers(tree, strict)
    selected = [layer for layer in layers if criterion(layer)]
    logger.debug(
        "Selected %d of %d layers (%s)"
        % (len(selected), len(layers), criterion.mode.value)
    )
    return selected


def paint_order(layers: Sequence[LayerDescriptor]) -> list[LayerDescriptor]:
    """Reverse manifest order into back-to-front paint order."""
    return list(reversed(layers))
