"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

from typing import Dict, Any, Optional
from pathlib import Path

from jinja2 import DictLoader, Environment, FileSystemLoader

from .errors import TemplateError


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Use in-memory templates
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self._env.filters["indent_lines"] = self._indent_lines_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {str(e)}")

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        if not isinstance(self._env.loader, DictLoader):
            # Convert to DictLoader to support in-memory templates
            self._env.loader = DictLoader({})

        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template can be loaded."""
        return template_name in self._env.loader.list_templates()

    # Template filters for code generation

    def _indent_lines_filter(self, value: str, indent: str = "    ") -> str:
        """Prefix every non-empty line with ``indent``."""
        lines = str(value).split("\n")
        return "\n".join(indent + line if line.strip() else line for line in lines)


# Built-in templates

CLASS_TEMPLATE = """\
{% if export %}export {% endif %}{{ keyword }} {{ name }} {
{% for line in fields %}
{{ line }}
{% endfor %}
{% if constructor %}
{% if create_from %}

{{ indent }}static createFrom(source: any = {}) {
{{ indent }}{{ indent }}return new {{ name }}(source);
{{ indent }}}
{% endif %}

{{ indent }}constructor(source: any = {}) {
{{ indent }}{{ indent }}if ('string' === typeof source) source = JSON.parse(source);
{% for line in constructor_body %}
{{ line }}
{% endfor %}
{{ indent }}}
{% if helper %}

{{ helper | indent_lines(indent) }}
{% endif %}
{% endif %}
{{ custom_block }}}"""

ENUM_TEMPLATE = """\
{% if export %}export {% endif %}enum {{ name }} {
{% for element in elements %}
{{ indent }}{{ element.name }} = {{ element.literal }},
{% endfor %}
}"""

CONVERT_VALUES_TEMPLATE = """\
convertValues(a: any, classs: any, asMap: boolean = false): any {
{{ i }}if (!a) {
{{ i }}{{ i }}return a;
{{ i }}}
{{ i }}if (a.slice) {
{{ i }}{{ i }}return (a as any[]).map(elem => this.convertValues(elem, classs));
{{ i }}} else if ("object" === typeof a) {
{{ i }}{{ i }}if (asMap) {
{{ i }}{{ i }}{{ i }}for (const key of Object.keys(a)) {
{{ i }}{{ i }}{{ i }}{{ i }}a[key] = new classs(a[key]);
{{ i }}{{ i }}{{ i }}}
{{ i }}{{ i }}{{ i }}return a;
{{ i }}{{ i }}}
{{ i }}{{ i }}return new classs(a);
{{ i }}}
{{ i }}return a;
}"""

CUSTOM_BLOCK_TEMPLATE = """\
{{ indent }}//[{{ name }}:]
{{ code }}

{{ indent }}//[end]
"""

BUILTIN_TEMPLATES = {
    "class.ts.j2": CLASS_TEMPLATE,
    "enum.ts.j2": ENUM_TEMPLATE,
    "convert_values.ts.j2": CONVERT_VALUES_TEMPLATE,
    "custom_block.ts.j2": CUSTOM_BLOCK_TEMPLATE,
}


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """
    Create a template engine preloaded with the built-in templates.

    Args:
        template_dir: Optional directory of templates overriding the built-ins
    """
    engine = TemplateEngine(template_dir)
    if not (template_dir and template_dir.exists()):
        for name, content in BUILTIN_TEMPLATES.items():
            engine.add_template(name, content)
    return engine
