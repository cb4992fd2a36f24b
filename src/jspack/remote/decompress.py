# src/jspack/remote/decompress.py
"""
Extração de arquivos compactados (tar, zip) e de arquivos comprimidos
isolados (gzip, bzip2, xz/lzma).

Formatos:
    - archive_format: "tar" | "zip" | None (detectado pelo conteúdo)
    - compression_format: "gz"/"gzip" | "bz2"/"bzip2" | "xz" | "lzma" | None
      (detectado pelo sufixo; tar comprimido também é detectado pelo conteúdo)

Apenas arquivos regulares são extraídos; links e entradas que escapariam
do diretório de destino geram erro.
"""

from __future__ import annotations

import bz2
import gzip
import lzma
import shutil
import tarfile
import zipfile
from pathlib import Path, PurePosixPath
from typing import IO, Callable, Dict, List, Optional

_OPENERS: Dict[str, Callable[..., IO[bytes]]] = {
    "gz": gzip.open,
    "gzip": gzip.open,
    "bz2": bz2.open,
    "bzip2": bz2.open,
    "xz": lzma.open,
    "lzma": lzma.open,
}

_SUFFIXES = {
    ".gz": "gz",
    ".tgz": "gz",
    ".bz2": "bz2",
    ".tbz2": "bz2",
    ".xz": "xz",
    ".txz": "xz",
    ".lzma": "lzma",
}


def _safe_relative(name: str) -> str:
    parts = [p for p in PurePosixPath(name.replace("\\", "/")).parts if p not in ("", ".", "/")]
    if not parts or any(p == ".." for p in parts) or name.startswith("/"):
        raise ValueError(f"Entrada insegura no arquivo: {name!r}")
    return "/".join(parts)


def _opener(compression: Optional[str]) -> Optional[Callable[..., IO[bytes]]]:
    if compression is None:
        return None
    try:
        return _OPENERS[compression.lower()]
    except KeyError:
        raise ValueError(f"Formato de compressão não suportado: {compression}") from None


def _write(dest: Path, rel: str, src: IO[bytes]) -> str:
    target = dest.joinpath(*rel.split("/"))
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("wb") as out:
        shutil.copyfileobj(src, out)
    return rel


def _extract_zip(source: Path, dest: Path) -> List[str]:
    out = []
    with zipfile.ZipFile(source) as zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            with zf.open(info) as src:
                out.append(_write(dest, _safe_relative(info.filename), src))
    return out


def _extract_tar(tf: tarfile.TarFile, dest: Path) -> List[str]:
    out = []
    for member in tf:
        if member.isdir():
            continue
        if not member.isfile():
            raise ValueError(f"Entrada não regular no tar: {member.name!r}")
        src = tf.extractfile(member)
        if src is None:
            continue
        with src:
            out.append(_write(dest, _safe_relative(member.name), src))
    return out


def _detect_archive(source: Path, compression: Optional[str]) -> Optional[str]:
    if compression is None and zipfile.is_zipfile(source):
        return "zip"
    opener = _opener(compression)
    if opener is None:
        return "tar" if tarfile.is_tarfile(source) else None
    try:
        with opener(source, "rb") as fh, tarfile.open(fileobj=fh, mode="r|"):
            return "tar"
    except (tarfile.TarError, OSError, EOFError, lzma.LZMAError):
        return None


def decompress(
    source: str,
    dest_dir: str,
    compression_format: Optional[str] = None,
    archive_format: Optional[str] = None,
) -> List[str]:
    """Extrai `source` em `dest_dir` e devolve os paths relativos, ordenados."""
    src = Path(source)
    dest = Path(dest_dir)
    dest.mkdir(parents=True, exist_ok=True)

    compression = compression_format or _SUFFIXES.get(src.suffix.lower())
    archive = (archive_format or "").lower() or _detect_archive(src, compression)

    if archive == "zip":
        return sorted(_extract_zip(src, dest))

    if archive == "tar":
        opener = _opener(compression)
        if opener is None:
            with tarfile.open(src, mode="r:*") as tf:
                return sorted(_extract_tar(tf, dest))
        with opener(src, "rb") as fh, tarfile.open(fileobj=fh, mode="r|") as tf:
            return sorted(_extract_tar(tf, dest))

    if archive:
        raise ValueError(f"Formato de arquivo não suportado: {archive}")

    opener = _opener(compression)
    if opener is None:
        raise ValueError(f"Não foi possível detectar o formato de {src.name}")
    name = src.stem if src.suffix.lower() in _SUFFIXES else f"{src.name}.out"
    with opener(src, "rb") as fh:
        return [_write(dest, _safe_relative(name), fh)]
