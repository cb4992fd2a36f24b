# src/jspack/core/config/__init__.py
"""
Camada de configuração do jspack.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Hashing canônico para rastreabilidade e fingerprints de cache

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - Conflitos estruturais são tratados como erro
"""

from .defaults import CHECKSUM_MANIFEST_FILE, DEFAULT_CHECKSUM_PATTERN, DEFAULT_CONFIG
from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash, compute_fingerprint
from .loader import load_config
from .merge import deep_merge

__all__ = [
    "CHECKSUM_MANIFEST_FILE",
    "DEFAULT_CHECKSUM_PATTERN",
    "DEFAULT_CONFIG",
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "compute_fingerprint",
    "load_config",
    "deep_merge",
]
