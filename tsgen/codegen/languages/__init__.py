"""
Language-specific code generators.

This module contains generators for different programming languages.
"""

from .typescript import TypeScriptify, create_generator, create_interface_generator

__all__ = ["TypeScriptify", "create_generator", "create_interface_generator"]
