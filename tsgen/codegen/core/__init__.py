"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .errors import (
    ConfigError,
    EnumRegistrationError,
    GeneratorError,
    TemplateError,
    UnsupportedTypeError,
)
from .generator import CodeGenerator, GenerationResult, generate_code
from .schema import (
    FieldDescriptor,
    FieldOptions,
    FieldTag,
    Kind,
    StructType,
    TypeDescriptor,
    deep_fields,
    describe,
    ts_field,
)
from .config import GeneratorConfig, ConfigManager, load_config
from .custom_code import load_custom_code, parse_custom_code, render_custom_block
from .templates import TemplateEngine, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    # Errors
    "GeneratorError",
    "UnsupportedTypeError",
    "EnumRegistrationError",
    "ConfigError",
    "TemplateError",
    # Type description
    "Kind",
    "TypeDescriptor",
    "FieldDescriptor",
    "FieldTag",
    "FieldOptions",
    "StructType",
    "describe",
    "deep_fields",
    "ts_field",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    # Custom code blocks
    "parse_custom_code",
    "load_custom_code",
    "render_custom_block",
    # Template system
    "TemplateEngine",
    "create_template_engine",
]
