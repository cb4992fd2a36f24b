# src/jspack/resolve/__init__.py
"""Colaborador de resolução de dependências (arquivos zip/jar já resolvidos)."""

from .archives import ArchiveResolver, DependencyResolver

__all__ = ["ArchiveResolver", "DependencyResolver"]
