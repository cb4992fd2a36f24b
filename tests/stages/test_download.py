# tests/stages/test_download.py
"""
Testes do Stage `fetch.download` contra um servidor HTTP local.

Invariantes:
    - O download roda em contexto isolado com o cliente HTTP como
      dependência extra
    - A composição é download → checksum → unzip → decompress → move
    - Um checksum divergente falha antes da extração
"""

import hashlib
import io
import zipfile

import pytest

pytest.importorskip("requests")

from jspack.core.engine import Engine  # noqa: E402
from jspack.core.exceptions import ChecksumMismatchError, ExecutionError, StageError  # noqa: E402
from jspack.stages import download  # noqa: E402
from jspack.stages.archive import UnzipStage  # noqa: E402
from jspack.stages.fetch import DOWNLOAD_DEPENDENCIES, DownloadStage  # noqa: E402
from jspack.stages.files import MoveStage  # noqa: E402
from jspack.stages.verify import VerifyChecksumStage  # noqa: E402


def _zip(entries):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return buf.getvalue()


def test_factory_composes_in_fail_fast_order():
    pipeline = download("https://example.org/dist/lib.zip?v=1", checksum="ab", unzip=True, target="x/lib.zip")

    assert pipeline.id == "fetch.download"
    assert [type(s) for s in pipeline] == [DownloadStage, VerifyChecksumStage, UnzipStage, MoveStage]
    assert pipeline.stages[0].name == "lib.zip"


def test_download_adds_file_via_isolated_context(ctx, http_server, builder):
    root, base = http_server
    (root / "lib.js").write_text("var lib = 1;")

    result = Engine(ctx=ctx).run(download(f"{base}/lib.js", target="cljsjs/lib/development/lib.inc.js"))

    assert result.snapshot.paths() == ("cljsjs/lib/development/lib.inc.js",)
    assert result.snapshot.get("cljsjs/lib/development/lib.inc.js").read_text() == "var lib = 1;"
    assert builder.builds == [DOWNLOAD_DEPENDENCIES]
    assert result.results[0].metrics == {"bytes": 12}


def test_download_unzip_with_checksum(ctx, http_server):
    root, base = http_server
    data = _zip({"lib/lib.js": "js", "lib/lib.css": "css"})
    (root / "lib.zip").write_bytes(data)

    result = Engine(ctx=ctx).run(
        download(f"{base}/lib.zip", checksum=hashlib.md5(data).hexdigest(), unzip=True)
    )

    assert result.snapshot.paths() == ("lib/lib.css", "lib/lib.js")
    assert "verify.checksum" in ctx.warnings


def test_bad_checksum_fails_before_extraction(ctx, http_server):
    root, base = http_server
    (root / "lib.zip").write_bytes(_zip({"lib.js": "js"}))
    engine = Engine(ctx=ctx)

    with pytest.raises(StageError) as exc:
        engine.run(download(f"{base}/lib.zip", checksum="0" * 32, unzip=True))

    assert exc.value.stage == "verify.checksum"
    assert isinstance(exc.value.cause, ChecksumMismatchError)
    assert exc.value.snapshot.paths() == ("lib.zip",)
    assert "archive.unzip" not in engine.manifest.stages


def test_http_error_is_execution_error(ctx, http_server):
    _, base = http_server

    with pytest.raises(StageError) as exc:
        Engine(ctx=ctx).run(download(f"{base}/missing.js"))

    assert isinstance(exc.value.cause, ExecutionError)
    assert "HTTPError" in exc.value.cause.details["reason"]
