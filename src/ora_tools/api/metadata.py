"""
Attribute values from token metadata.

Token metadata documents list trait selections as::

    {"attributes": [{"trait_type": "Eyes", "value": "Eyes_Blue"}, ...]}

Only the values matter for layer selection; they are matched against layer
names.
"""

import logging
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


def attribute_values(metadata: Optional[Any]) -> frozenset[str]:
    """
    Extract the set of attribute values.

    :param metadata: a metadata mapping with an ``attributes`` list, a bare
        list of attribute mappings, or a list of strings.
    :raises TypeError: if the attribute list is a bare string.
    :return: frozenset of values; empty when there are no attributes.
    """
    if metadata is None:
        return frozenset()
    if isinstance(metadata, Mapping):
        attributes = metadata.get("attributes") or []
    else:
        attributes = metadata
    if isinstance(attributes, (str, bytes)):
        raise TypeError(
            "Expected a list of attributes, got %s" % type(attributes).__name__
        )

    values = set()
    for attribute in attributes:
        if isinstance(attribute, str):
            values.add(attribute)
        elif isinstance(attribute, Mapping):
            if attribute.get("value") is None:
                logger.debug("Ignoring attribute without value: %r" % (attribute,))
                continue
            values.add(str(attribute["value"]))
        else:
            values.add(str(attribute))
    return frozenset(values)
