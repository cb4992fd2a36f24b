# src/jspack/remote/libs.py
"""
Validação de bibliotecas empacotadas.

Para cada jar, lê `deps.cljs` e confere que todo arquivo referenciado em
`:file`, `:file-min` e `:externs` existe em algum dos jars validados e é
texto UTF-8 não vazio.
"""

from __future__ import annotations

import re
import zipfile
from typing import Any, Dict, Iterable, List

DEPS_FILE = "deps.cljs"

_FILE_KEYS = re.compile(r':(file|file-min)\s+"([^"]+)"')
_EXTERNS = re.compile(r":externs\s+\[([^\]]*)\]")
_STRING = re.compile(r'"([^"]+)"')


def referenced_files(deps_source: str) -> List[str]:
    refs = [m.group(2) for m in _FILE_KEYS.finditer(deps_source)]
    for block in _EXTERNS.finditer(deps_source):
        refs.extend(_STRING.findall(block.group(1)))
    return sorted(set(refs))


def validate_libs(jar_paths: Iterable[str]) -> Dict[str, Any]:
    jars = list(jar_paths)
    contents: Dict[str, bytes] = {}
    deps: Dict[str, str] = {}

    for jar in jars:
        with zipfile.ZipFile(jar) as zf:
            for info in zf.infolist():
                if info.is_dir():
                    continue
                data = zf.read(info)
                contents.setdefault(info.filename, data)
                if info.filename == DEPS_FILE:
                    deps[jar] = data.decode("utf-8")

    problems: List[Dict[str, str]] = []
    checked = 0
    for jar in jars:
        source = deps.get(jar)
        if source is None:
            problems.append({"jar": jar, "path": DEPS_FILE, "problem": "missing"})
            continue
        for ref in referenced_files(source):
            checked += 1
            data = contents.get(ref)
            if data is None:
                problems.append({"jar": jar, "path": ref, "problem": "missing"})
                continue
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError:
                problems.append({"jar": jar, "path": ref, "problem": "not utf-8"})
                continue
            if not text.strip():
                problems.append({"jar": jar, "path": ref, "problem": "empty"})

    return {"jars": len(jars), "checked": checked, "problems": problems}
