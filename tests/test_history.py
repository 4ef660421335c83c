import pytest

from history import HistoryEntry, HistoryLog, MAX_ENTRIES


def test_add_keeps_newest_first(tmp_path):
    log = HistoryLog(str(tmp_path / "h.json"))
    log.add("Additive (16-bit)", "single", "info", "first")
    log.add("Additive (16-bit)", "single", "match", "second")
    assert [e.summary for e in log] == ["second", "first"]


def test_log_is_capped(tmp_path):
    log = HistoryLog(str(tmp_path / "h.json"))
    for i in range(MAX_ENTRIES + 10):
        log.add("Additive (8-bit)", "batch", "info", f"#{i}")
    assert len(log) == MAX_ENTRIES
    assert log.entries[0].summary == f"#{MAX_ENTRIES + 9}"
    assert log.entries[-1].summary == "#10"


def test_persisted_between_sessions(tmp_path):
    path = str(tmp_path / "h.json")
    log = HistoryLog(path)
    entry = log.add("Hamming (7,4)", "correction", "corrected", "0110111: error at bit 5")

    reloaded = HistoryLog.load(path)
    assert len(reloaded) == 1
    assert reloaded.entries[0] == entry


def test_clear_removes_file(tmp_path):
    path = tmp_path / "h.json"
    log = HistoryLog(str(path))
    log.add("Additive (16-bit)", "single", "mismatch", "x")
    assert path.exists()
    log.clear()
    assert len(log) == 0
    assert not path.exists()


def test_corrupted_file_starts_new_log(tmp_path, capsys):
    path = tmp_path / "h.json"
    path.write_text("[{\"broken\": 1}]", encoding='utf-8')
    assert len(HistoryLog.load(str(path))) == 0
    assert "поврежден" in capsys.readouterr().out


def test_entry_validation():
    with pytest.raises(ValueError):
        HistoryEntry("Additive (16-bit)", "upload", "info", "x")
    with pytest.raises(ValueError):
        HistoryEntry("Additive (16-bit)", "single", "ok", "x")
    entry = HistoryEntry("Additive (16-bit)", "single", "match", "Received: abc")
    assert "match" in str(entry)
    assert entry.id
