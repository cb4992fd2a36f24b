from .archive_file import ArchiveFileStage, from_archive
from .dependencies import DEPENDENCY_SUFFIXES, DependenciesStage, from_dependencies
from .webjar import WebjarStage, from_webjar

__all__ = [
    "ArchiveFileStage",
    "DEPENDENCY_SUFFIXES",
    "DependenciesStage",
    "WebjarStage",
    "from_archive",
    "from_dependencies",
    "from_webjar",
]
