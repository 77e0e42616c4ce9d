"""Domain-specific errors for tsgen code generation."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base exception for code generation errors."""


class UnsupportedTypeError(GeneratorError):
    """Raised when a field type has no TypeScript mapping and no override."""


class EnumRegistrationError(GeneratorError):
    """Raised when an enum collection cannot supply values and names."""


class ConfigError(GeneratorError):
    """Exception raised for configuration-related errors."""


class TemplateError(GeneratorError):
    """Exception raised for template-related errors."""
