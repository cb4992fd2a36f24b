# src/jspack/core/isolation/__init__.py
"""
Contextos de execução isolados do jspack.

Ferramentas de terceiros (descompressão, minificação, validação) trazem
suas próprias versões de dependências. Executá-las em contextos isolados
troca latência por chamada pela possibilidade de usar várias toolchains
mutuamente incompatíveis dentro da mesma run.

API pública:
    - IsolatedContext   → protocolo (invoke)
    - SubprocessContext → sandbox em subprocesso Python
    - VirtualEnvBuilder → builder de virtualenvs com dependências extras
    - ContextCache      → cache por valor, com construção preguiçosa
    - LazyContext       → handle devolvido por `ContextCache.acquire`
"""

from .builder import ContextBuilder, VirtualEnvBuilder
from .cache import ContextCache, LazyContext
from .context import IsolatedContext, SubprocessContext

__all__ = [
    "ContextBuilder",
    "VirtualEnvBuilder",
    "ContextCache",
    "LazyContext",
    "IsolatedContext",
    "SubprocessContext",
]
