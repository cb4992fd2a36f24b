# src/jspack/core/engine/__init__.py
"""
Engine do jspack.

Componentes:
    - compose / Pipeline → composição associativa de Stages
    - Engine             → execução sequencial com commit após cada Stage
    - run                → atalho: executa e devolve o Snapshot final

Invariantes:
    - Stages executam estritamente em ordem, um por vez
    - Nenhum commit parcial é visível após um Stage que falha
    - Todo erro é propagado como `StageError`
"""

from .engine import Engine, Pipeline, RunResult, compose, run

__all__ = ["Engine", "Pipeline", "RunResult", "compose", "run"]
