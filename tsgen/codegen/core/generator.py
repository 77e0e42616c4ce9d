"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from .config import GeneratorConfig
from .templates import TemplateEngine, create_template_engine


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.ts')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use the built-in in-memory templates.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def convert(self, custom_code: Optional[Dict[str, str]] = None) -> str:
        """
        Generate code for everything registered.

        Args:
            custom_code: Hand-written blocks keyed by entity name

        Returns:
            Generated code as a string
        """
        pass

    @abstractmethod
    def convert_to_file(self, file_path) -> None:
        """Generate code into a file, keeping its custom code blocks."""
        pass

    def validate(self) -> List[str]:
        """
        Validate registered types for structural issues.

        Returns:
            List of warning messages (empty if no issues)
        """
        return []

    def metadata(self) -> Dict[str, Any]:
        """Describe the registered content for reporting."""
        return {
            "language": self.language_name,
            "file_extension": self.file_extension,
        }

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, custom_code: Optional[Dict[str, str]] = None
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        custom_code: Hand-written blocks keyed by entity name

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate()
        code = generator.convert(custom_code)
        return GenerationResult(code, warnings, generator.metadata())
    except Exception as e:
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
