# src/jspack/core/checksums/ci.py
"""Detecção de ambiente não interativo (integração contínua)."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from jspack.core.config.defaults import DEFAULT_CONFIG


def is_ci(environ: Mapping[str, str], config: Optional[Mapping[str, Any]] = None) -> bool:
    """
    True quando alguma das variáveis `checksums.ci_env_vars` tem valor
    em `checksums.ci_truthy` (comparação sem caixa, sem espaços).
    """
    defaults = DEFAULT_CONFIG["checksums"]
    cfg = config or {}
    names: Iterable[str] = cfg.get("ci_env_vars") or defaults["ci_env_vars"]
    truthy = {str(v).strip().lower() for v in (cfg.get("ci_truthy") or defaults["ci_truthy"])}
    return any(str(environ.get(name, "")).strip().lower() in truthy for name in names)
