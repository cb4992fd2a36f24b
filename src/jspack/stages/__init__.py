# src/jspack/stages/__init__.py
"""
Stages concretos do jspack.

Cada Stage é um dataclass com `id` pontuado, `kind` e
`run(ctx, snapshot) -> StageResult`. As fábricas abaixo são a forma
usual de montar um pipeline:

    from jspack.core.engine import compose
    from jspack.stages import download, deps_cljs, jar, validate

    pipeline = compose(
        download("https://example.org/lib.zip", unzip=True),
        deps_cljs(name="lib", no_externs=True),
        jar("lib.jar"),
        validate(),
    )
"""

from .archive import decompress, unzip
from .fetch import download
from .files import move
from .metadata import deps_cljs
from .package import jar
from .source import from_archive, from_dependencies, from_webjar
from .transform import concat_preamble, minify, replace_content
from .validate import validate, validate_checksums, validate_libs
from .verify import checksum

__all__ = [
    "checksum",
    "concat_preamble",
    "decompress",
    "deps_cljs",
    "download",
    "from_archive",
    "from_dependencies",
    "from_webjar",
    "jar",
    "minify",
    "move",
    "replace_content",
    "unzip",
    "validate",
    "validate_checksums",
    "validate_libs",
]
