# src/jspack/core/__init__.py
"""
Core do jspack.

Este pacote reúne as peças com invariantes reais do sistema:

    - fileset      → Snapshot imutável, StagingArea e commit
    - pipeline     → contrato de Stage, resultado e contexto de execução
    - engine       → composição associativa e execução fail-fast
    - isolation    → contextos isolados com cache por valor
    - checksums    → manifest de checksums e política CI/interativa
    - config       → carregamento, merge e hashing de configuração
    - traceability → Manifest de execução e Event Log

Princípios fundamentais:
    - Nenhum Snapshot é mutado in-place
    - Stages executam estritamente em sequência
    - Todo erro é fatal e propagado ao chamador
"""
