# src/jspack/stages/metadata/edn.py
"""Escrita mínima de EDN (apenas o necessário para `deps.cljs`)."""

from __future__ import annotations

import json
from typing import Any, Mapping


class Keyword(str):
    pass


class Symbol(str):
    pass


def dumps(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Keyword):
        return f":{value}"
    if isinstance(value, Symbol):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, Mapping):
        return "{" + ", ".join(f"{dumps(k)} {dumps(v)}" for k, v in value.items()) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(dumps(v) for v in value) + "]"
    raise TypeError(f"Tipo não representável em EDN: {type(value).__name__}")
