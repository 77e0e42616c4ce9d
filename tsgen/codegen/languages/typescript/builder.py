"""
Field emitter for TypeScript classes.

Each ``add_*`` call turns one resolved field into a declaration line and
an initializer line for the constructor body.
"""

from typing import List

from ...core.schema import FieldOptions, TypeDescriptor
from .types import TypeScriptTypeMapper

VALUE_PLACEHOLDER = "__VALUE__"
CONVERT_VALUES_CALL = "this.convertValues("


class TypeScriptClassBuilder:
    """Accumulates field declarations and constructor lines for one class."""

    def __init__(self, type_mapper: TypeScriptTypeMapper, indent: str, owner: str):
        """
        Args:
            type_mapper: Kind lookup for primitive fields
            indent: Indentation unit
            owner: Name of the type being built, used in error messages
        """
        self.type_mapper = type_mapper
        self.indent = indent
        self.owner = owner
        self.fields: List[str] = []
        self.constructor_body: List[str] = []

    @property
    def needs_convert_values(self) -> bool:
        """Whether any initializer re-hydrates nested values."""
        return any(CONVERT_VALUES_CALL in line for line in self.constructor_body)

    def add_simple_field(
        self,
        name: str,
        optional: bool,
        field_type: TypeDescriptor,
        opts: FieldOptions,
    ):
        """Add a primitive field, honouring explicit type and transform overrides."""
        ts_type = opts.ts_type or self.type_mapper.require(
            field_type.kind, name, self.owner, field_type.name
        )

        self._add_field(name, optional, ts_type)
        value = self._source(name)
        if opts.ts_transform:
            value = opts.ts_transform.replace(VALUE_PLACEHOLDER, value)
        self._add_initializer(name, value)

    def add_simple_array_field(
        self,
        name: str,
        optional: bool,
        element_type: TypeDescriptor,
        depth: int,
        opts: FieldOptions,
    ):
        """Add an array of primitives, nested ``depth`` levels deep."""
        if opts.ts_type:
            ts_type = opts.ts_type
        else:
            element = self.type_mapper.require(
                element_type.kind, name, self.owner, element_type.name
            )
            ts_type = element + "[]" * depth

        self._add_field(name, optional, ts_type)
        self._add_initializer(name, self._source(name))

    def add_typed_array_field(
        self, name: str, optional: bool, element: str, depth: int
    ):
        """Add an array whose element type expression is already resolved."""
        self._add_field(name, optional, element + "[]" * depth)
        self._add_initializer(name, self._source(name))

    def add_enum_field(self, name: str, optional: bool, enum_name: str):
        self._add_field(name, optional, enum_name)
        self._add_initializer(name, self._source(name))

    def add_struct_field(self, name: str, optional: bool, class_name: str):
        self._add_field(name, optional, class_name)
        self._add_initializer(name, self._convert_values(name, class_name))

    def add_array_of_structs_field(
        self, name: str, optional: bool, class_name: str, depth: int
    ):
        self._add_field(name, optional, class_name + "[]" * depth)
        self._add_initializer(name, self._convert_values(name, class_name))

    def add_map_field(
        self,
        name: str,
        optional: bool,
        key_type: str,
        value_type: str,
        value_class: str = "",
    ):
        """
        Add a keyed mapping field.

        Args:
            value_class: Class to re-hydrate every value with, if values are structs
        """
        self._add_field(name, optional, map_type(key_type, value_type))
        if value_class:
            value = self._convert_values(name, value_class, as_map=True)
        else:
            value = self._source(name)
        self._add_initializer(name, value)

    def _source(self, name: str) -> str:
        return f'source["{name}"]'

    def _convert_values(self, name: str, class_name: str, as_map: bool = False) -> str:
        args = f"{self._source(name)}, {class_name}"
        if as_map:
            args += ", true"
        return f"{CONVERT_VALUES_CALL}{args})"

    def _add_initializer(self, name: str, value: str):
        self.constructor_body.append(f"{self.indent}{self.indent}this.{name} = {value};")

    def _add_field(self, name: str, optional: bool, ts_type: str):
        marker = "?" if optional else ""
        self.fields.append(f"{self.indent}{name}{marker}: {ts_type};")


def map_type(key_type: str, value_type: str) -> str:
    """TypeScript index-signature type for a keyed mapping."""
    return f"{{[key: {key_type}]: {value_type}}}"
