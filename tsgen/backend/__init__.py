"""Backend package - lowers IR containers to TypeScript and renders them."""

from .lowering import lower, lower_all
from .tagging import TaggingError, strategy_for, tag_variants
from .types import TypeMappingError, map_type
from .typescript import TsBackend, emit_typescript, render
from .util import rename_field, rename_type

__all__ = [
    "TaggingError",
    "TsBackend",
    "TypeMappingError",
    "emit_typescript",
    "lower",
    "lower_all",
    "map_type",
    "rename_field",
    "rename_type",
    "render",
    "strategy_for",
    "tag_variants",
]
