# src/jspack/core/fileset/__init__.py
"""
Fileset do jspack: snapshots imutáveis, staging areas e commit.

API pública:
    - Role, TrackedFile, Snapshot → modelo imutável
    - StagingArea                 → buffer exclusivo de um Stage
    - SnapshotStore               → commit (remoções + adições)
    - files_by_extension, files_by_pattern, output_files, source_files
"""

from .model import Role, Snapshot, TrackedFile, normalize_path
from .query import (
    files_by_extension,
    files_by_pattern,
    files_not_by_extension,
    output_files,
    source_files,
)
from .staging import StagingArea
from .store import SnapshotStore

__all__ = [
    "Role",
    "Snapshot",
    "TrackedFile",
    "normalize_path",
    "StagingArea",
    "SnapshotStore",
    "files_by_extension",
    "files_by_pattern",
    "files_not_by_extension",
    "output_files",
    "source_files",
]
