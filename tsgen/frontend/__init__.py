"""Frontend package - decodes serialized IR into Containers."""

from .load import LoadError, load_container, load_containers, load_type
from .types import TypeSyntaxError, parse_type_expr

__all__ = [
    "LoadError",
    "TypeSyntaxError",
    "load_container",
    "load_containers",
    "load_type",
    "parse_type_expr",
]
