# src/jspack/remote/webjars.py
"""Mapa de assets de webjars: `<lib>/<arquivo>` → entrada completa no jar."""

from __future__ import annotations

import zipfile
from typing import Dict, Iterable

WEBJARS_PREFIX = "META-INF/resources/webjars/"


def asset_map(archive_paths: Iterable[str]) -> Dict[str, str]:
    assets: Dict[str, str] = {}
    for archive in archive_paths:
        with zipfile.ZipFile(archive) as zf:
            for info in zf.infolist():
                name = info.filename
                if info.is_dir() or not name.startswith(WEBJARS_PREFIX):
                    continue
                parts = name[len(WEBJARS_PREFIX):].split("/")
                # <lib>/<versão>/<caminho...>
                if len(parts) < 3:
                    continue
                key = "/".join([parts[0]] + parts[2:])
                assets.setdefault(key, name)
    return dict(sorted(assets.items()))
