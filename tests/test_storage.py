# tests/test_storage.py
"""Tests for local blob storage."""

from __future__ import annotations

import io
from pathlib import Path

from kridart.services import storage as storage_module
from kridart.services.storage import LocalBlobStorage


def test_save_names_file_after_timestamp(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(storage_module.time, "time", lambda: 1_700_000_000.5)
    blob = LocalBlobStorage(tmp_path / "blobs").save("a.txt", io.BytesIO(b"hello"))

    assert Path(blob.path).name == "1700000000500-a.txt"
    assert Path(blob.path).read_bytes() == b"hello"


def test_same_name_in_same_millisecond_does_not_overwrite(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(storage_module.time, "time", lambda: 1_700_000_000.0)
    storage = LocalBlobStorage(tmp_path)

    first = storage.save("logo.png", io.BytesIO(b"first"))
    second = storage.save("logo.png", io.BytesIO(b"second"))

    assert first.path != second.path
    assert Path(first.path).read_bytes() == b"first"
    assert Path(second.path).read_bytes() == b"second"
