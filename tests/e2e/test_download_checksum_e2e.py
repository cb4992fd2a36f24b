# tests/e2e/test_download_checksum_e2e.py
"""
Cenário legado: download com checksum explícito + unzip.

    - checksum correto: o zip é extraído e removido do fileset
    - checksum incorreto: a run falha em verify.checksum, antes da extração
"""

import hashlib
import io
import zipfile

import pytest

pytest.importorskip("requests")

from jspack.core.engine import Engine, run  # noqa: E402
from jspack.core.exceptions import StageError  # noqa: E402
from jspack.stages import download  # noqa: E402


@pytest.fixture
def published(http_server):
    root, base = http_server
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("dist/lib.js", "lib")
    (root / "lib.zip").write_bytes(buf.getvalue())
    return f"{base}/lib.zip", hashlib.md5(buf.getvalue()).hexdigest().upper()


def test_good_checksum_extracts(ctx, published):
    url, digest = published
    out = run(download(url, checksum=digest, unzip=True), ctx=ctx)
    assert out.paths() == ("dist/lib.js",)


def test_bad_checksum_stops_before_unzip(ctx, published):
    url, digest = published
    engine = Engine(ctx=ctx)

    with pytest.raises(StageError) as exc:
        engine.run(download(url, checksum="F" * 32, unzip=True))

    assert str(exc.value.cause) == f"Checksum of file lib.zip is not {'F' * 32} but {digest}"
    assert exc.value.snapshot.paths() == ("lib.zip",)
    assert list(engine.manifest.stages) == ["fetch.download", "verify.checksum"]
