"""
TypeScript code generator implementation.

Walks the registered dataclass graph and emits TypeScript classes (or
interfaces) and enums, dependencies first, each type at most once.
"""

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from ....logging_config import get_logger
from ....utils import backup_file, write_generated_file
from ...core.config import GeneratorConfig, get_config_manager, load_config
from ...core.custom_code import load_custom_code, render_custom_block
from ...core.errors import UnsupportedTypeError
from ...core.generator import CodeGenerator
from ...core.schema import (
    FieldDescriptor,
    FieldOptions,
    Kind,
    StructType,
    TypeDescriptor,
    deep_fields,
    describe,
)
from .builder import TypeScriptClassBuilder, map_type
from .enums import EnumElement, EnumRegistry
from .types import INDEX_KEY_TYPES, TypeScriptTypeMapper

logger = get_logger(__name__)


@dataclass
class ConversionState:
    """Per-run state: custom code to splice and the types already emitted."""

    custom_code: Dict[str, str] = field(default_factory=dict)
    converted: Set[Any] = field(default_factory=set)


class TypeScriptify(CodeGenerator):
    """Code generator for TypeScript classes, interfaces and enums."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        type_mapper: Optional[TypeScriptTypeMapper] = None,
    ):
        """Initialize TypeScript generator with configuration."""
        super().__init__(config)

        # Extract configuration
        self.prefix = self.config.prefix
        self.suffix = self.config.suffix
        self.indent = self.config.indent
        self.create_interface = self.config.create_interface
        self.export = self.config.export
        self.create_from_method = self.config.create_from_method
        self.create_constructor = self.config.create_constructor
        self.backup_dir = self.config.backup_dir
        self.header = self.config.header
        self.custom_imports: List[str] = []
        for statement in self.config.imports:
            self.add_import(statement)

        self.type_mapper = type_mapper or TypeScriptTypeMapper()

        # Registrations
        self.enums = EnumRegistry()
        self.struct_types: List[TypeDescriptor] = []
        self.field_options: Dict[Any, FieldOptions] = {}

    @classmethod
    def from_config(
        cls, config_file: Optional[Union[str, Path]] = None, **overrides: Any
    ) -> "TypeScriptify":
        """Create a generator from a JSON config file and keyword overrides."""
        return cls(load_config(overrides or None, config_file))

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return ".ts"

    # Fluent configuration

    def with_prefix(self, prefix: str) -> "TypeScriptify":
        self.prefix = prefix
        return self

    def with_suffix(self, suffix: str) -> "TypeScriptify":
        self.suffix = suffix
        return self

    def with_indent(self, indent: str) -> "TypeScriptify":
        self.indent = indent
        return self

    def with_interface(self, create_interface: bool = True) -> "TypeScriptify":
        self.create_interface = create_interface
        return self

    def with_export(self, export: bool = True) -> "TypeScriptify":
        self.export = export
        return self

    def with_create_from_method(self, create: bool = True) -> "TypeScriptify":
        self.create_from_method = create
        return self

    def with_constructor(self, create: bool = True) -> "TypeScriptify":
        self.create_constructor = create
        return self

    def with_backup_dir(self, backup_dir: Union[str, Path]) -> "TypeScriptify":
        self.backup_dir = str(backup_dir)
        return self

    def current_config(self) -> GeneratorConfig:
        """Snapshot of the effective configuration."""
        return dataclasses.replace(
            self.config,
            prefix=self.prefix,
            suffix=self.suffix,
            indent=self.indent,
            create_interface=self.create_interface,
            export=self.export,
            create_from_method=self.create_from_method,
            create_constructor=self.create_constructor,
            backup_dir=self.backup_dir,
            header=self.header,
            imports=list(self.custom_imports),
        )

    # Registration

    def add(self, obj: Any) -> "TypeScriptify":
        """
        Register a struct to convert.

        Args:
            obj: A StructType, a dataclass (class or instance), or a TypeDescriptor
        """
        if isinstance(obj, StructType):
            return self._add_struct_type(obj)
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return self.add_type(type(obj))
        return self.add_type(obj)

    def add_type(self, tp: Any) -> "TypeScriptify":
        """Register a struct type (dataclass class or descriptor)."""
        return self._add_struct_type(StructType(tp))

    def _add_struct_type(self, struct_type: StructType) -> "TypeScriptify":
        descriptor = describe(struct_type.type)
        if descriptor.kind == Kind.POINTER:
            descriptor = descriptor.elem
        if descriptor.kind != Kind.STRUCT:
            raise UnsupportedTypeError(
                f"Only structs can be registered, got {descriptor.name} ({descriptor.kind.value})"
            )

        self.struct_types.append(descriptor)
        for tp, options in struct_type.field_options.items():
            self.field_options[describe(tp).key] = options

        logger.debug(
            "Registered %s with %d field option override(s)",
            descriptor.name,
            len(struct_type.field_options),
        )
        return self

    def add_enum(self, values: Any) -> "TypeScriptify":
        """Register an enum from a collection of elements."""
        self.enums.register(values)
        return self

    def add_enum_values(self, tp: Any, values: Any) -> "TypeScriptify":
        """Deprecated, use :meth:`add_enum`."""
        logger.warning("add_enum_values() is deprecated, use add_enum()")
        return self.add_enum(values)

    def add_import(self, statement: str) -> "TypeScriptify":
        """Add an import line to the top of the output (once)."""
        if statement not in self.custom_imports:
            self.custom_imports.append(statement)
        return self

    def entity_name(self, name: str) -> str:
        return f"{self.prefix}{name}{self.suffix}"

    # Conversion

    def convert(self, custom_code: Optional[Dict[str, str]] = None) -> str:
        """
        Convert all registered enums and structs.

        Args:
            custom_code: Hand-written blocks keyed by entity name

        Returns:
            TypeScript source

        Raises:
            UnsupportedTypeError: If any field cannot be mapped
        """
        run = ConversionState(custom_code=dict(custom_code or {}))
        trim_chars = " " + self.indent + "\r\n"

        result = "".join(f"{statement}\n" for statement in self.custom_imports)

        for descriptor, elements in self.enums.items():
            code = self._convert_enum(descriptor, elements, run)
            if code:
                result += "\n" + code.strip(trim_chars)

        for descriptor in self.struct_types:
            code = self._convert_type(descriptor, run)
            if code:
                result += "\n" + code.strip(trim_chars)

        logger.debug("Converted %d type(s)", len(run.converted))
        return result

    def convert_to_file(self, file_path: Union[str, Path]) -> None:
        """
        Convert into ``file_path``, keeping its custom code blocks.

        The previous file is backed up first when a backup directory is set.
        I/O errors propagate unchanged.
        """
        path = Path(file_path)
        if self.backup_dir:
            backup_file(path, self.backup_dir)

        custom_code = load_custom_code(path)
        converted = self.convert(custom_code)
        write_generated_file(path, self.header, converted)

    def _convert_enum(
        self, descriptor: TypeDescriptor, elements: List[EnumElement], run: ConversionState
    ) -> str:
        if descriptor.key in run.converted:
            return ""
        run.converted.add(descriptor.key)

        return self.render_template(
            "enum.ts.j2",
            {
                "export": self.export,
                "name": self.entity_name(descriptor.name),
                "indent": self.indent,
                "elements": elements,
            },
        )

    def _convert_type(self, typ: TypeDescriptor, run: ConversionState) -> str:
        """Convert one struct, preceded by any dependency not yet converted."""
        if typ.key in run.converted:
            logger.debug("Skipping %s, already converted", typ.name)
            return ""
        run.converted.add(typ.key)

        entity_name = self.entity_name(typ.name)
        logger.debug("Converting %s to %s", typ.name, entity_name)

        dependencies: List[str] = []
        builder = TypeScriptClassBuilder(self.type_mapper, self.indent, typ.name)

        for fld in deep_fields(typ):
            if not fld.external_name or fld.ignored:
                continue
            self._add_field(builder, fld, typ, run, dependencies)

        constructor = not self.create_interface and (
            self.create_constructor or self.create_from_method
        )

        helper = ""
        if constructor and builder.needs_convert_values:
            helper = self.render_template("convert_values.ts.j2", {"i": self.indent})

        custom_block = ""
        code = run.custom_code.get(entity_name)
        if code:
            custom_block = render_custom_block(
                entity_name, code, self.indent, self.template_engine
            )

        own = self.render_template(
            "class.ts.j2",
            {
                "export": self.export,
                "keyword": "interface" if self.create_interface else "class",
                "name": entity_name,
                "indent": self.indent,
                "fields": builder.fields,
                "constructor": constructor,
                "create_from": self.create_from_method,
                "constructor_body": builder.constructor_body,
                "helper": helper,
                "custom_block": custom_block,
            },
        )

        return "\n".join(dependencies + [own])

    def _add_field(
        self,
        builder: TypeScriptClassBuilder,
        fld: FieldDescriptor,
        owner: TypeDescriptor,
        run: ConversionState,
        dependencies: List[str],
    ):
        """Resolve one field and hand it to the builder."""
        name = fld.external_name
        optional = fld.optional
        field_type = fld.type
        if field_type.kind == Kind.POINTER:
            field_type = field_type.elem

        opts = self._field_options(fld, field_type)

        if opts:
            builder.add_simple_field(name, optional, field_type, opts)
        elif field_type.key in self.enums:
            builder.add_enum_field(name, optional, self._enum_name(field_type))
        elif field_type.kind == Kind.STRUCT:
            self._convert_dependency(field_type, run, dependencies)
            builder.add_struct_field(name, optional, self.entity_name(field_type.name))
        elif field_type.kind == Kind.MAP:
            key_type = self._map_key_type(field_type.map_key, name, owner)

            value = field_type.elem
            if value.kind == Kind.POINTER:
                value = value.elem
            value_type = self._type_expression(value, name, owner, run, dependencies)

            value_class = ""
            if value.kind == Kind.STRUCT and value.key not in self.enums:
                value_class = self.entity_name(value.name)
            builder.add_map_field(name, optional, key_type, value_type, value_class)
        elif field_type.kind == Kind.SLICE:
            element = field_type.elem
            if element.kind == Kind.POINTER:
                element = element.elem

            depth = 1
            while element.kind == Kind.SLICE:
                element = element.elem
                depth += 1
                if element.kind == Kind.POINTER:
                    element = element.elem

            if element.key in self.enums:
                builder.add_typed_array_field(name, optional, self._enum_name(element), depth)
            elif element.kind == Kind.STRUCT:
                self._convert_dependency(element, run, dependencies)
                builder.add_array_of_structs_field(
                    name, optional, self.entity_name(element.name), depth
                )
            elif element.kind == Kind.MAP:
                element_type = self._type_expression(element, name, owner, run, dependencies)
                builder.add_typed_array_field(name, optional, element_type, depth)
            else:
                builder.add_simple_array_field(name, optional, element, depth, opts)
        else:
            builder.add_simple_field(name, optional, field_type, opts)

    def _field_options(self, fld: FieldDescriptor, field_type: TypeDescriptor) -> FieldOptions:
        """Options from the per-type table, overridden by the field's own tag."""
        options = self.field_options.get(field_type.key)
        if options is None:
            options = self.field_options.get(fld.type.key, FieldOptions())
        return options.merged_with(
            FieldOptions(ts_type=fld.tag.ts_type, ts_transform=fld.tag.ts_transform)
        )

    def _convert_dependency(
        self, typ: TypeDescriptor, run: ConversionState, dependencies: List[str]
    ):
        chunk = self._convert_type(typ, run)
        if chunk:
            dependencies.append(chunk)

    def _enum_name(self, typ: TypeDescriptor) -> str:
        descriptor, _ = self.enums.get(typ.key)
        return self.entity_name(descriptor.name)

    def _map_key_type(self, key: TypeDescriptor, name: str, owner: TypeDescriptor) -> str:
        """TypeScript index type for a map key; only strings and numbers qualify."""
        if key.kind == Kind.POINTER:
            key = key.elem

        if key.kind in (Kind.STRUCT, Kind.SLICE, Kind.MAP):
            raise UnsupportedTypeError(
                f"Map key {key.name} of field {name!r} in {owner.name} must be "
                f"a string or number type"
            )

        key_type = self.type_mapper.require(key.kind, name, owner.name, key.name)
        if key_type not in INDEX_KEY_TYPES:
            raise UnsupportedTypeError(
                f"Map key type {key_type} of field {name!r} in {owner.name} "
                f"cannot index a TypeScript object"
            )
        return key_type

    def _type_expression(
        self,
        typ: TypeDescriptor,
        name: str,
        owner: TypeDescriptor,
        run: ConversionState,
        dependencies: List[str],
    ) -> str:
        """TypeScript type for a nested value, converting structs it references."""
        if typ.kind == Kind.POINTER:
            return self._type_expression(typ.elem, name, owner, run, dependencies)
        if typ.key in self.enums:
            return self._enum_name(typ)
        if typ.kind == Kind.STRUCT:
            self._convert_dependency(typ, run, dependencies)
            return self.entity_name(typ.name)
        if typ.kind == Kind.SLICE:
            return self._type_expression(typ.elem, name, owner, run, dependencies) + "[]"
        if typ.kind == Kind.MAP:
            return map_type(
                self._map_key_type(typ.map_key, name, owner),
                self._type_expression(typ.elem, name, owner, run, dependencies),
            )
        return self.type_mapper.require(typ.kind, name, owner.name, typ.name)

    # Reporting

    def validate(self) -> List[str]:
        """Warn about registrations that produce empty or odd output."""
        warnings = get_config_manager().validate_config(self.current_config())

        keyword = "interface" if self.create_interface else "class"
        for typ in self.struct_types:
            visible = [f for f in deep_fields(typ) if f.external_name and not f.ignored]
            if not visible:
                warnings.append(
                    f"Type {typ.name} has no visible fields - will generate an empty {keyword}"
                )

        return warnings

    def metadata(self) -> Dict[str, Any]:
        metadata = super().metadata()
        metadata.update(
            {
                "struct_count": len(self.struct_types),
                "enum_count": len(self.enums),
                "output_shape": "interface" if self.create_interface else "class",
                "prefix": self.prefix,
                "suffix": self.suffix,
            }
        )
        return metadata


# Factory functions
def create_generator(**options: Any) -> TypeScriptify:
    """Create a TypeScript generator, overriding defaults with ``options``."""
    return TypeScriptify(load_config(options or None))


def create_interface_generator(**options: Any) -> TypeScriptify:
    """Create a generator that emits interfaces instead of classes."""
    options.setdefault("create_interface", True)
    options.setdefault("create_from_method", False)
    options.setdefault("create_constructor", False)
    return create_generator(**options)
