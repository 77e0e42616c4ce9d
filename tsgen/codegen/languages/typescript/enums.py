"""
Enum registry.

Python types carry no portable notion of an enumeration's display names,
so enums are registered explicitly as collections of elements that each
supply a value and a TypeScript member name.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple

from ....logging_config import get_logger
from ...core.errors import EnumRegistrationError
from ...core.schema import TypeDescriptor, describe

logger = get_logger(__name__)

VALUE_ATTR = "value"
NAME_ATTR = "ts_name"

# Registering these would turn every field of that type into an enum
PLAIN_TYPES = (bool, int, float, str)


@dataclass(frozen=True)
class EnumElement:
    """A single enum member: raw value and display name."""

    value: Any
    name: str

    @property
    def literal(self) -> str:
        """The value as a TypeScript literal."""
        value = self.value.value if isinstance(self.value, Enum) else self.value
        return json.dumps(value)


def _element_name(item: Any) -> str:
    name = getattr(item, NAME_ATTR)
    return name() if callable(name) else name


def enum_element(item: Any) -> Tuple[Any, EnumElement]:
    """
    Resolve one registration item.

    Returns:
        Tuple of (enum type, element)

    Raises:
        EnumRegistrationError: If neither a value/name pair nor a name method
            exists, or the value has no JSON literal form
    """
    if isinstance(item, Enum) and hasattr(item, NAME_ATTR):
        enum_type, element = type(item), EnumElement(item.value, _element_name(item))
    elif hasattr(item, VALUE_ATTR) and hasattr(item, NAME_ATTR) and not callable(
        getattr(item, NAME_ATTR)
    ):
        value = getattr(item, VALUE_ATTR)
        enum_type, element = type(value), EnumElement(value, _element_name(item))
    elif callable(getattr(item, NAME_ATTR, None)):
        enum_type, element = type(item), EnumElement(item, _element_name(item))
    else:
        raise EnumRegistrationError(
            f"{type(item).__name__} has neither '{VALUE_ATTR}'/'{NAME_ATTR}' fields "
            f"nor a {NAME_ATTR}() method"
        )

    try:
        element.literal
    except (TypeError, ValueError) as e:
        raise EnumRegistrationError(
            f"Value of {element.name!r} has no JSON literal form: {e}"
        ) from e

    return enum_type, element


class EnumRegistry:
    """Ordered collection of registered enums keyed by type."""

    def __init__(self):
        self._enums: Dict[Any, Tuple[TypeDescriptor, List[EnumElement]]] = {}

    def register(self, values: Iterable[Any]) -> TypeDescriptor:
        """
        Register one enum from a collection of same-family elements.

        Args:
            values: Records with ``value``/``ts_name`` or scalars with ``ts_name()``

        Returns:
            Descriptor of the registered enum type

        Raises:
            EnumRegistrationError: On malformed input, raised immediately
        """
        if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            raise EnumRegistrationError(
                f"Values for {type(values).__name__} isn't a collection"
            )

        resolved = [enum_element(item) for item in values]
        if not resolved:
            raise EnumRegistrationError("Cannot register an empty enum")

        enum_type = resolved[0][0]
        if enum_type in PLAIN_TYPES:
            raise EnumRegistrationError(
                f"Enum values must have a dedicated type, got plain {enum_type.__name__}"
            )

        for other_type, element in resolved[1:]:
            if other_type is not enum_type:
                raise EnumRegistrationError(
                    f"Element {element.name!r} is a {other_type.__name__}, "
                    f"expected {enum_type.__name__}"
                )

        descriptor = describe(enum_type)
        if descriptor.key in self._enums:
            logger.warning("Enum %s registered twice, keeping the latest values", descriptor.name)

        self._enums[descriptor.key] = (descriptor, [element for _, element in resolved])
        logger.debug("Registered enum %s with %d element(s)", descriptor.name, len(resolved))
        return descriptor

    def __contains__(self, key: Any) -> bool:
        return key in self._enums

    def __len__(self) -> int:
        return len(self._enums)

    def get(self, key: Any) -> Tuple[TypeDescriptor, List[EnumElement]]:
        return self._enums[key]

    def items(self):
        """Registered ``(descriptor, elements)`` pairs in registration order."""
        return list(self._enums.values())
