"""tsgen: TypeScript definitions from Python dataclasses."""

from .codegen import (
    FieldOptions,
    GeneratorConfig,
    Kind,
    StructType,
    TypeDescriptor,
    TypeScriptify,
    ts_field,
    quick_generate,
)

__version__ = "0.1.0"

__all__ = [
    "TypeScriptify",
    "GeneratorConfig",
    "StructType",
    "FieldOptions",
    "Kind",
    "TypeDescriptor",
    "ts_field",
    "quick_generate",
]
