# src/jspack/__init__.py
"""
jspack — pipeline de empacotamento de assets JavaScript de terceiros.

Este pacote raiz define o namespace público do jspack, um framework para
empacotar arquivos JavaScript/CSS vindos de arquivos de dependência,
repositórios de pacotes e URLs remotas em um artefato distribuível.

Arquitetura em alto nível:
    - core.fileset      → snapshots imutáveis do fileset e staging areas
    - core.pipeline     → protocolo de Stage, RunContext e memoização
    - core.engine       → composição e execução sequencial de Stages
    - core.isolation    → contextos de execução isolados (subprocesso/venv)
    - core.checksums    → detecção de drift via manifest de checksums
    - stages            → Stages concretos (download, unzip, minify, ...)

Limites explícitos:
    - Não resolve grafos de dependência
    - Não publica artefatos
    - Não implementa minificação nem formatos de arquivo por conta própria
"""

__version__ = "0.4.0"

__all__ = ["__version__"]
