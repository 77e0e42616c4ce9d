"""
TypeScript type mapping for code generation.

Maps structural kinds to TypeScript primitive type names.
"""

from typing import Dict, Mapping, Optional

from ...core.errors import UnsupportedTypeError
from ...core.schema import Kind

NUMBER = "number"
STRING = "string"
BOOLEAN = "boolean"
ANY = "any"

TS_KIND_MAP: Dict[Kind, str] = {
    Kind.BOOL: BOOLEAN,
    Kind.INTERFACE: ANY,
    Kind.INT: NUMBER,
    Kind.INT8: NUMBER,
    Kind.INT16: NUMBER,
    Kind.INT32: NUMBER,
    Kind.INT64: NUMBER,
    Kind.UINT: NUMBER,
    Kind.UINT8: NUMBER,
    Kind.UINT16: NUMBER,
    Kind.UINT32: NUMBER,
    Kind.UINT64: NUMBER,
    Kind.FLOAT32: NUMBER,
    Kind.FLOAT64: NUMBER,
    Kind.STRING: STRING,
}

# Types TypeScript accepts in an index signature
INDEX_KEY_TYPES = {STRING, NUMBER}


class TypeScriptTypeMapper:
    """Fixed lookup from kinds to TypeScript primitive names."""

    def __init__(self, overrides: Optional[Mapping[Kind, str]] = None):
        """
        Initialize the table.

        Args:
            overrides: Replacements for individual kinds (e.g. ``{Kind.INT64: "bigint"}``)
        """
        self._kinds = dict(TS_KIND_MAP)
        if overrides:
            self._kinds.update(overrides)

    def map_kind(self, kind: Kind) -> Optional[str]:
        """Return the TypeScript name for ``kind``, or None if unmapped."""
        return self._kinds.get(kind)

    def require(self, kind: Kind, field_name: str, owner: str, type_name: str = "") -> str:
        """
        Return the TypeScript name for ``kind`` or fail.

        Raises:
            UnsupportedTypeError: If the kind has no mapping
        """
        ts_type = self.map_kind(kind)
        if ts_type is None:
            described = f"{kind.value}/{type_name}" if type_name else kind.value
            raise UnsupportedTypeError(
                f"Cannot find type for {described} (field {field_name!r} of {owner})"
            )
        return ts_type
