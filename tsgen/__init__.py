"""tsgen - translate type definitions described in IR into TypeScript.

    from tsgen import load_containers, translate_all, emit_typescript

    defs = translate_all(load_containers(text))
    print(emit_typescript(defs))
"""

from __future__ import annotations

from .backend import TaggingError, TypeMappingError, emit_typescript, render
from .backend.lowering import lower as translate
from .backend.lowering import lower_all as translate_all
from .frontend import LoadError, TypeSyntaxError, load_containers

__all__ = [
    "LoadError",
    "TaggingError",
    "TypeMappingError",
    "TypeSyntaxError",
    "emit_typescript",
    "load_containers",
    "render",
    "translate",
    "translate_all",
]
