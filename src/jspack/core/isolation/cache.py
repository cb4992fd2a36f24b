# src/jspack/core/isolation/cache.py
"""
Cache de contextos isolados de uma run.

Contextos são identificados pelo fingerprint por valor do conjunto de
dependências extras: dois `acquire` com conjuntos iguais (mesmo que sejam
objetos diferentes, em qualquer ordem) devolvem o mesmo handle, e o
builder é chamado no máximo uma vez por conjunto.

A construção é adiada até o primeiro `invoke`, pois um Stage pode nunca
chegar a precisar do seu contexto se o pipeline falhar antes.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, FrozenSet, Iterable, Optional

from jspack.core.config.hashing import compute_fingerprint

from .builder import ContextBuilder
from .context import IsolatedContext


class LazyContext:
    """Handle de um contexto isolado construído no primeiro uso."""

    def __init__(self, dependencies: FrozenSet[str], builder: ContextBuilder):
        self.dependencies = dependencies
        self._builder = builder
        self._context: Optional[IsolatedContext] = None
        self._lock = threading.Lock()

    @property
    def built(self) -> bool:
        return self._context is not None

    def get(self) -> IsolatedContext:
        with self._lock:
            if self._context is None:
                self._context = self._builder(self.dependencies)
            return self._context

    def invoke(self, op: str, *args: Any, **kwargs: Any) -> Any:
        return self.get().invoke(op, *args, **kwargs)

    def close(self) -> None:
        with self._lock:
            ctx, self._context = self._context, None
        close = getattr(ctx, "close", None)
        if callable(close):
            close()


class ContextCache:
    """Cache (por valor) de contextos isolados, com ciclo de vida da run."""

    def __init__(self, builder: ContextBuilder):
        self._builder = builder
        self._contexts: Dict[str, LazyContext] = {}
        self._lock = threading.Lock()

    def acquire(self, extra_dependencies: Iterable[str] = ()) -> LazyContext:
        dependencies = frozenset(str(d).strip() for d in extra_dependencies if str(d).strip())
        key = compute_fingerprint(dependencies)
        with self._lock:
            handle = self._contexts.get(key)
            if handle is None:
                handle = LazyContext(dependencies, self._builder)
                self._contexts[key] = handle
            return handle

    def __len__(self) -> int:
        return len(self._contexts)

    def close(self) -> None:
        with self._lock:
            handles = list(self._contexts.values())
            self._contexts.clear()
        for handle in handles:
            handle.close()
