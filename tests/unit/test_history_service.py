from __future__ import annotations

import json

from projnav.services.history_service import RecentHistoryLedger


def test_record_and_persist_ascending_recency(tmp_path):
    path = tmp_path / "rank.json"
    history = RecentHistoryLedger(path, capacity=3)
    history.load()

    history.record("app", "/src/app/a.py")
    history.record("app", "/src/app/b.py")
    history.record("app", "/src/app/a.py")
    history.record("lib", "/src/lib/x.py")

    assert history.persist() is True
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "app": ["/src/app/b.py", "/src/app/a.py"],
        "lib": ["/src/lib/x.py"],
    }
    assert history.persist() is False


def test_load_replays_ranks(tmp_path):
    path = tmp_path / "rank.json"
    path.write_text(
        json.dumps({"app": ["/a", "/b", "/c"], "broken": "nope", "mixed": ["/x", 3]}),
        encoding="utf-8",
    )
    history = RecentHistoryLedger(path, capacity=2)

    assert history.load() is True
    cache = history.cache_for("app")
    assert cache is not None
    assert cache.get_data() == {"/b": 0, "/c": 1}
    assert "broken" not in history
    assert history.cache_for("mixed").keys() == ["/x"]
    assert history.load() is False


def test_load_creates_missing_file(tmp_path):
    path = tmp_path / "rank.json"
    history = RecentHistoryLedger(path)

    history.load()

    assert path.read_text(encoding="utf-8") == "{}"
    assert history.projects() == []
    assert history.cache_for("app") is None


def test_forget_drops_project(tmp_path):
    history = RecentHistoryLedger(tmp_path / "rank.json")
    history.record("app", "/a")

    assert history.forget("app") is True
    assert history.forget("app") is False
    history.persist()
    assert json.loads((tmp_path / "rank.json").read_text(encoding="utf-8")) == {}
