"""
Hand-written code blocks that survive regeneration.

Blocks live in the generated file between a ``//[Name:]`` line and a
``//[end]`` line, where ``Name`` is the generated entity they belong to.
"""

from pathlib import Path
from typing import Dict, Optional, Union

from ...logging_config import get_logger
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)

START_PREFIX = "//["
START_SUFFIX = ":]"
END_MARKER = "//[end]"


def parse_custom_code(content: str) -> Dict[str, str]:
    """
    Extract custom code blocks from previously generated output.

    Args:
        content: Full text of the previous output

    Returns:
        Dict mapping entity name to block text (markers excluded)
    """
    blocks: Dict[str, str] = {}
    current_name = ""
    current_lines = []

    for line in content.split("\n"):
        trimmed = line.strip()
        if trimmed.startswith(START_PREFIX) and trimmed.endswith(START_SUFFIX):
            current_name = trimmed[len(START_PREFIX) : -len(START_SUFFIX)]
            current_lines = []
        elif trimmed == END_MARKER:
            if current_name:
                blocks[current_name] = "\n".join(current_lines).rstrip(" \t\r\n")
            current_name = ""
            current_lines = []
        elif current_name:
            current_lines.append(line)

    if current_name:
        logger.debug("Ignoring unterminated custom code block: %s", current_name)

    return blocks


def load_custom_code(file_path: Union[str, Path]) -> Dict[str, str]:
    """
    Load custom code blocks from a file.

    A missing file yields no blocks; any other I/O error propagates.
    """
    path = Path(file_path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No previous output at %s, no custom code to keep", path)
        return {}

    blocks = parse_custom_code(content)
    logger.debug("Loaded %d custom code block(s) from %s", len(blocks), path)
    return blocks


def render_custom_block(
    name: str,
    code: str,
    indent: str = "    ",
    engine: Optional[TemplateEngine] = None,
) -> str:
    """Render a custom code block between fresh markers."""
    engine = engine or create_template_engine()
    return engine.render_template(
        "custom_block.ts.j2", {"name": name, "code": code, "indent": indent}
    )
