"""Tests for the snapshot store."""

import json
import os

import pytest

from shortlinks.errors import SnapshotError
from shortlinks.repository import Shortlink, SnapshotStore


@pytest.fixture
def links():
    return [
        Shortlink(uid="aaa", owner_id="o1", short="http://s/aaa", long="https://a.example.com"),
        Shortlink(
            uid="bbb",
            owner_id="o2",
            short="http://s/bbb",
            long="https://b.example.com",
            deleted=True,
            correlation_id="corr-b",
        ),
    ]


class TestSnapshotStore:
    """Test snapshot file handling."""

    def test_write_then_read(self, snapshot_path, links):
        store = SnapshotStore(snapshot_path)

        store.write(links)

        assert store.read() == links

    def test_file_format(self, snapshot_path, links):
        SnapshotStore(snapshot_path).write(links)

        with open(snapshot_path, encoding="utf-8") as f:
            records = json.load(f)

        assert records[1] == {
            "uid": "bbb",
            "owner_id": "o2",
            "short": "http://s/bbb",
            "long": "https://b.example.com",
            "deleted": True,
            "correlation_id": "corr-b",
        }

    def test_write_replaces_previous_snapshot(self, snapshot_path, links):
        store = SnapshotStore(snapshot_path)
        store.write(links)

        store.write(links[:1])

        assert store.read() == links[:1]
        # No temporary files left behind
        assert os.listdir(os.path.dirname(snapshot_path)) == [os.path.basename(snapshot_path)]

    def test_read_missing_file(self, snapshot_path):
        assert SnapshotStore(snapshot_path).read() == []

    @pytest.mark.parametrize("content", ["", "   \n", "null", "[]"])
    def test_read_empty_file(self, snapshot_path, content):
        with open(snapshot_path, "w", encoding="utf-8") as f:
            f.write(content)

        assert SnapshotStore(snapshot_path).read() == []

    @pytest.mark.parametrize("content", ["{not json", '[{"uid": "x"}]', '{"uid": "x"}'])
    def test_read_corrupt_file(self, snapshot_path, content):
        with open(snapshot_path, "w", encoding="utf-8") as f:
            f.write(content)

        with pytest.raises(SnapshotError):
            SnapshotStore(snapshot_path).read()

    def test_missing_optional_fields(self, snapshot_path):
        with open(snapshot_path, "w", encoding="utf-8") as f:
            json.dump([{"uid": "a", "owner_id": "o", "short": "s", "long": "l"}], f)

        [link] = SnapshotStore(snapshot_path).read()

        assert not link.deleted
        assert link.correlation_id == ""

    def test_disabled_store(self, links):
        store = SnapshotStore(None)

        assert not store.enabled
        store.write(links)
        assert store.read() == []

    def test_write_to_missing_directory(self, tmp_path, links):
        store = SnapshotStore(str(tmp_path / "missing" / "snap.json"))

        with pytest.raises(SnapshotError):
            store.write(links)
