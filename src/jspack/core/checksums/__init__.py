# src/jspack/core/checksums/__init__.py
"""
Subsistema de manifest de checksums.

Componentes:
    - digest   → MD5 em blocos (`md5_hex`, `digest_files`)
    - manifest → leitura/escrita/diff do arquivo versionado
    - ci       → detecção de ambiente não interativo
    - confirm  → fontes de confirmação (AutoReject, InteractiveConsole)
    - validate → Stage `validate.checksums`
"""

from .ci import is_ci
from .confirm import (
    PROMPT,
    AutoReject,
    ConfirmationSource,
    InteractiveConsole,
    ScriptedConfirmation,
)
from .digest import digest_files, md5_hex
from .manifest import ChecksumDiff, diff_checksums, read_checksums, render_checksums, write_checksums
from .validate import ChecksumOutcome, ValidateChecksumsStage, validate_checksums

__all__ = [
    "AutoReject",
    "ChecksumDiff",
    "ChecksumOutcome",
    "ConfirmationSource",
    "InteractiveConsole",
    "PROMPT",
    "ScriptedConfirmation",
    "ValidateChecksumsStage",
    "diff_checksums",
    "digest_files",
    "is_ci",
    "md5_hex",
    "read_checksums",
    "render_checksums",
    "validate_checksums",
    "write_checksums",
]
