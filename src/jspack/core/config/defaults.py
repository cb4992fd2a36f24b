# src/jspack/core/config/defaults.py
"""Configuração padrão embutida do jspack (base do deep-merge)."""

from typing import Any, Dict

CHECKSUM_MANIFEST_FILE = "jspack-checksums.json"

# Arquivos JS empacotados: cljsjs/<lib>/<common|production|development>/**/*.{inc,ext}.js
DEFAULT_CHECKSUM_PATTERN = r"^cljsjs/.*/(common|production|development)/.*\.(ext|inc)\.js$"

DEFAULT_CONFIG: Dict[str, Any] = {
    "engine": {
        "log_level": "INFO",
    },
    "checksums": {
        "manifest_file": CHECKSUM_MANIFEST_FILE,
        "patterns": [DEFAULT_CHECKSUM_PATTERN],
        "ci_env_vars": ["CI", "CIRCLECI"],
        "ci_truthy": ["true", "1", "yes"],
    },
    "isolation": {
        "python": None,
        "pip_args": [],
        "timeout_seconds": 600,
    },
    "download": {
        "timeout_seconds": 60,
    },
    "stages": {},
}
