import pytest

from shrs.history import DefaultHistory, FileBackedHistory, HistoryError


def test_default_most_recent_first():
    hist = DefaultHistory()
    hist.add("ls")
    hist.add("cd")
    assert hist.get(0) == "cd"
    assert hist.get(1) == "ls"
    assert len(hist) == 2


def test_default_out_of_range():
    hist = DefaultHistory()
    hist.add("ls")
    assert hist.get(1) is None
    assert hist.get(-1) is None


def test_default_clear():
    hist = DefaultHistory()
    hist.add("ls")
    hist.clear()
    assert len(hist) == 0
    assert hist.get(0) is None


def test_file_created_when_missing(tmp_path):
    path = tmp_path / "history"
    hist = FileBackedHistory(path)
    assert path.exists()
    assert len(hist) == 0


def test_file_round_trip(tmp_path):
    path = tmp_path / "history"
    hist = FileBackedHistory(path)
    hist.add("first")
    hist.add("second")
    reloaded = FileBackedHistory(path)
    assert [reloaded.get(i) for i in range(len(reloaded))] == ["second", "first"]


def test_file_reads_existing_lines(tmp_path):
    path = tmp_path / "history"
    path.write_text("a\nb\nc\n")
    hist = FileBackedHistory(path)
    assert len(hist) == 3
    assert hist.get(0) == "a"
    assert hist.get(2) == "c"


def test_file_dedups_keeping_most_recent(tmp_path):
    path = tmp_path / "history"
    hist = FileBackedHistory(path)
    hist.add("ls")
    hist.add("cd")
    hist.add("ls")
    assert [hist.get(i) for i in range(len(hist))] == ["ls", "cd"]
    assert path.read_text().splitlines() == ["ls", "cd"]


def test_file_clear_persists(tmp_path):
    path = tmp_path / "history"
    hist = FileBackedHistory(path)
    hist.add("ls")
    hist.clear()
    assert len(FileBackedHistory(path)) == 0


def test_open_failure(tmp_path):
    with pytest.raises(HistoryError):
        FileBackedHistory(tmp_path / "missing_dir" / "history")