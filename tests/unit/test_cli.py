"""
Unit tests for the board CLI.
"""

import json

import pytest

from syncboard.cli import board_cli
from syncboard.store import JsonFileBackend, RecordStore

from tests.factories import make_item, make_record


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("SYNCBOARD_CONFIG", raising=False)
    return tmp_path / "board"


@pytest.fixture
def run(data_dir):
    def invoke(*argv):
        return board_cli.main(["--data-dir", str(data_dir), "--log-level", "ERROR", *argv])
    return invoke


@pytest.fixture
def seeded(data_dir):
    store = RecordStore(JsonFileBackend(data_dir))
    store.save([
        make_record(id="a", title="Hiking", category="Sports", date="2024-03-01"),
        make_record(id="b", title="History", category="Science", date="2024-03-02", remote_id="7"),
        make_record(id="c", title="Other", category="Sports", date="2024-02-01"),
    ])
    return store


class FakeRemoteSource:
    def __init__(self, **kwargs):
        self.kwargs = kwargs

    async def fetch_remote_items(self):
        return [make_item(1, title="Remote", body="From the source")]


class TestCli:
    """Tests for board_cli.main"""

    def test_no_command_prints_help(self, capsys):
        assert board_cli.main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_status_before_first_sync(self, run, capsys):
        assert run("status") == 0
        out = capsys.readouterr().out
        assert "Records:   0" in out
        assert "never" in out

    def test_sync(self, run, data_dir, monkeypatch, capsys):
        monkeypatch.setattr(board_cli, "HttpRemoteSource", FakeRemoteSource)

        assert run("sync", "--seed", "1") == 0

        assert "SYNC COMPLETE" in capsys.readouterr().out
        store = RecordStore(JsonFileBackend(data_dir))
        assert [r.title for r in store.load()] == ["Remote"]
        assert store.last_sync_time() is not None

    def test_sync_failure_exit_code(self, run, monkeypatch, capsys):
        from syncboard.core.errors import SyncError

        class BrokenSource(FakeRemoteSource):
            async def fetch_remote_items(self):
                raise SyncError("unreachable")

        monkeypatch.setattr(board_cli, "HttpRemoteSource", BrokenSource)

        assert run("sync") == 1
        assert "unreachable" in capsys.readouterr().err

    def test_list_search_and_sort(self, run, seeded, capsys):
        assert run("list", "--search", "hi", "--sort", "title", "--json") == 0

        titles = [entry["title"] for entry in json.loads(capsys.readouterr().out)]
        assert titles == ["Hiking", "History"]

    def test_list_descending(self, run, seeded, capsys):
        run("list", "--sort", "date", "--desc", "--json")
        assert [e["id"] for e in json.loads(capsys.readouterr().out)] == ["b", "a", "c"]

    def test_list_category_and_range(self, run, seeded, capsys):
        run("list", "--category", "Sports", "--start", "2024-02-15", "--end", "2024-03-31", "--json")
        assert [e["id"] for e in json.loads(capsys.readouterr().out)] == ["a"]

    def test_list_empty_table(self, run, capsys):
        run("list")
        assert "No records" in capsys.readouterr().out

    def test_show_uses_wire_names(self, run, seeded, capsys):
        assert run("show", "b") == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["remoteId"] == "7"
        assert "createdAt" in payload

    def test_show_unknown_record(self, run, seeded, capsys):
        assert run("show", "zzz") == 1
        assert "not found" in capsys.readouterr().err

    def test_create(self, run, data_dir, capsys):
        assert run("create", "--title", "Mine", "--body", "Notes", "--date", "2024-03-01") == 0

        (record,) = RecordStore(JsonFileBackend(data_dir)).load()
        assert record.title == "Mine"
        assert record.category == "Technology"
        assert record.remote_id is None
        assert f"Created record {record.id}" in capsys.readouterr().out

    def test_create_invalid_lists_fields(self, run, data_dir, capsys):
        assert run("create", "--title", "Mine", "--body", " ", "--category", "Gardening") == 1

        err = capsys.readouterr().err
        assert "body" in err
        assert "category" in err
        assert RecordStore(JsonFileBackend(data_dir)).load() == ()

    def test_update_keeps_unspecified_fields(self, run, seeded, data_dir):
        assert run("update", "b", "--title", "Renamed") == 0

        record = RecordStore(JsonFileBackend(data_dir)).load()[1]
        assert record.title == "Renamed"
        assert record.category == "Science"
        assert record.remote_id == "7"

    def test_delete_with_yes(self, run, seeded, data_dir):
        assert run("delete", "a", "--yes") == 0
        assert [r.id for r in RecordStore(JsonFileBackend(data_dir)).load()] == ["b", "c"]

    def test_delete_declined(self, run, seeded, data_dir, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", lambda prompt: "n")

        assert run("delete", "a") == 0

        assert "Cancelled" in capsys.readouterr().out
        assert len(RecordStore(JsonFileBackend(data_dir)).load()) == 3

    def test_stats_explicit_window(self, run, seeded, capsys):
        assert run("stats", "--start", "2024-03-01", "--end", "2024-03-31", "--json") == 0

        view = json.loads(capsys.readouterr().out)
        assert view["summary"] == {"total": 2, "top_category": "Sports", "latest_date": "2024-03-02"}
        assert [d["date"] for d in view["dates"]] == ["2024-03-01", "2024-03-02"]

    def test_stats_without_data(self, run, capsys):
        assert run("stats", "--start", "2024-03-01", "--end", "2024-03-31") == 0
        out = capsys.readouterr().out
        assert "Top category:   -" in out
        assert "Latest date:    -" in out

    def test_invalid_record_id_argument(self, run):
        with pytest.raises(SystemExit):
            run("show", "../etc")

    @pytest.mark.parametrize("limit", ["-5", "0", "ten"])
    def test_invalid_sync_limit_argument(self, run, monkeypatch, capsys, limit):
        monkeypatch.setattr(board_cli, "HttpRemoteSource", FakeRemoteSource)

        with pytest.raises(SystemExit) as exc_info:
            run("sync", "--limit", limit)

        assert exc_info.value.code == 2
        assert "limit" in capsys.readouterr().err

    def test_status_with_undecodable_files(self, run, data_dir, capsys):
        data_dir.mkdir(parents=True)
        (data_dir / "records.json").write_bytes(b"\xff\xfe[not utf8")
        (data_dir / "last_sync.json").write_bytes(b"\xff\xfe")

        assert run("status") == 0
        out = capsys.readouterr().out
        assert "Records:   0" in out
        assert "never" in out
