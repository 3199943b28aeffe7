from __future__ import annotations

import json
from pathlib import Path

import pytest

from better_warps.errors import PreconditionError, WarpStorageError
from better_warps.models import WarpPoint
from better_warps.storage import DOCUMENT_VERSION, JsonWarpStore, decode_document, encode_document

SPAWN = WarpPoint(dimension_id="minecraft:overworld", x=0.5, y=64.5, z=0.5, yaw=0.0, pitch=0.0)


def _record(dimension: str, x: float = 0.0) -> dict:
    return {"dimension": dimension, "x": x, "y": 64.0, "z": 0.0, "yaw": 0.0, "pitch": 0.0}


def test_missing_file_is_created_empty(tmp_path: Path) -> None:
    path = tmp_path / "config" / "betterwarps.json"
    store = JsonWarpStore(path)

    assert store.load() == {}
    assert json.loads(path.read_text(encoding="utf-8")) == {"version": DOCUMENT_VERSION, "warps": {}}


def test_save_writes_pretty_versioned_document(tmp_path: Path) -> None:
    path = tmp_path / "betterwarps.json"
    JsonWarpStore(path).save({"spawn": SPAWN})

    text = path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert '\n  "warps": {' in text
    assert json.loads(text)["warps"]["spawn"] == SPAWN.to_json()
    assert list(tmp_path.iterdir()) == [path]


def test_legacy_flat_document_is_migrated(tmp_path: Path) -> None:
    path = tmp_path / "betterwarps.json"
    path.write_text(json.dumps({"Spawn": _record("minecraft:overworld")}), encoding="utf-8")

    warps = JsonWarpStore(path).load()

    assert list(warps) == ["spawn"]
    assert warps["spawn"].dimension_id == "minecraft:overworld"


def test_legacy_per_dimension_document_is_flattened() -> None:
    root = {
        "minecraft:overworld": {"home": _record("minecraft:overworld", x=1.0)},
        "minecraft:the_nether": {
            "home": _record("minecraft:the_nether", x=2.0),
            "fortress": {"dim": "minecraft:the_nether", "x": 3.0, "y": 70.0, "z": 0.0, "yaw": 0.0, "pitch": 0.0},
        },
        "minecraft:the_end": {},
    }

    warps = decode_document(root)

    assert set(warps) == {"home", "fortress"}
    assert warps["home"].x == 1.0
    assert warps["fortress"].dimension_id == "minecraft:the_nether"


def test_encode_decode_current_document() -> None:
    assert decode_document(encode_document({"spawn": SPAWN})) == {"spawn": SPAWN}


MALFORMED_DOCUMENTS = [
    b"{broken",
    b"[]",
    json.dumps({"version": 99, "warps": {}}).encode(),
    json.dumps({"version": 1, "warps": {"spawn": {"dimension": "minecraft:overworld"}}}).encode(),
    b'{"version": 1, "warps": {"\xff\xfe": {}}}',
    b'{"version": 1, "warps": {"spawn": {"dimension": "minecraft:overworld", "x": 1'
    + b"0" * 400
    + b', "y": 64, "z": 0, "yaw": 0, "pitch": 0}}}',
    b'{"version": ' + b"9" * 5000 + b"}",
    b"[" * 100_000 + b"]" * 100_000,
]


@pytest.mark.parametrize("content", MALFORMED_DOCUMENTS)
def test_malformed_documents_raise_storage_error(tmp_path: Path, content: bytes) -> None:
    path = tmp_path / "betterwarps.json"
    path.write_bytes(content)

    with pytest.raises(WarpStorageError):
        JsonWarpStore(path).load()


def test_unbound_store_reports_precondition() -> None:
    store = JsonWarpStore()

    with pytest.raises(PreconditionError):
        store.save({})
    with pytest.raises(PreconditionError):
        store.load()


def test_bind_sets_path(tmp_path: Path) -> None:
    store = JsonWarpStore()
    store.bind(tmp_path / "warps.json")

    store.save({"spawn": SPAWN})

    assert store.load() == {"spawn": SPAWN}


def test_broken_document_is_moved_aside_before_next_save(tmp_path: Path) -> None:
    path = tmp_path / "betterwarps.json"
    path.write_text("{broken", encoding="utf-8")
    store = JsonWarpStore(path)

    with pytest.raises(WarpStorageError):
        store.load()
    store.save({"spawn": SPAWN})

    assert (tmp_path / "betterwarps.json.corrupt").read_text(encoding="utf-8") == "{broken"
    assert store.load() == {"spawn": SPAWN}


def test_save_refuses_to_overwrite_when_document_cannot_be_moved(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "betterwarps.json"
    path.write_text("{broken", encoding="utf-8")
    store = JsonWarpStore(path)

    def _fail_replace(src, dst):
        raise PermissionError("read-only directory")

    monkeypatch.setattr("better_warps.storage.os.replace", _fail_replace)
    with pytest.raises(WarpStorageError):
        store.load()
    monkeypatch.undo()

    with pytest.raises(WarpStorageError, match="Refusing to overwrite"):
        store.save({"spawn": SPAWN})
    assert path.read_text(encoding="utf-8") == "{broken"


def test_legacy_flat_document_may_contain_warp_named_version() -> None:
    root = {"version": _record("minecraft:overworld", x=5.0), "spawn": _record("minecraft:overworld")}

    warps = decode_document(root)

    assert set(warps) == {"version", "spawn"}
    assert warps["version"].x == 5.0
