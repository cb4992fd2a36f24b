# src/jspack/core/pipeline/memo.py
"""Memoização local de Stages, chaveada por fingerprint explícito."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from jspack.core.config.hashing import compute_fingerprint


@dataclass
class FingerprintMemo:
    """
    Lembra o fingerprint das entradas relevantes da última execução.

    Uso típico em um Stage:

        fp = memo.fingerprint({"deps": resolver.fingerprint(), "staging": str(area.root)})
        if not memo.is_current(fp):
            ...trabalho caro...
            memo.record(fp)

    O fingerprint só é registrado depois que o trabalho termina; uma
    execução que falha no meio não é considerada atual.
    """

    _last: Optional[str] = None

    @staticmethod
    def fingerprint(value: Any) -> str:
        return compute_fingerprint(value)

    def is_current(self, fingerprint: str) -> bool:
        return self._last is not None and self._last == fingerprint

    def record(self, fingerprint: str) -> None:
        self._last = fingerprint

    def reset(self) -> None:
        self._last = None
