# src/jspack/remote/minify.py
"""Minificação de JS (rjsmin) e CSS (rcssmin)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import rcssmin
import rjsmin


def _io(input_path: str, output_path: str):
    src = Path(input_path)
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    return src, out


def minify_js(input_path: str, output_path: str, language: Optional[str] = None) -> Dict[str, Any]:
    # rjsmin é agnóstico ao nível da linguagem; `language` só é registrado
    src, out = _io(input_path, output_path)
    text = src.read_text(encoding="utf-8")
    result = rjsmin.jsmin(text, keep_bang_comments=True)
    out.write_text(result, encoding="utf-8")
    return {"input_bytes": len(text.encode("utf-8")), "output_bytes": len(result.encode("utf-8")), "language": language}


def minify_css(input_path: str, output_path: str) -> Dict[str, Any]:
    src, out = _io(input_path, output_path)
    text = src.read_text(encoding="utf-8")
    result = rcssmin.cssmin(text, keep_bang_comments=True)
    out.write_text(result, encoding="utf-8")
    return {"input_bytes": len(text.encode("utf-8")), "output_bytes": len(result.encode("utf-8"))}
