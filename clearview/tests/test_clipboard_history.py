from clearview.core.clipboard_history import ClipboardHistory


def test_add_dedupes_and_orders(qapp, tmp_path):
    history = ClipboardHistory(tmp_path / ClipboardHistory.FILE_NAME, max_items=3)
    assert history.add_item("a")
    assert history.add_item("b")
    assert history.add_item("a")
    assert history.get_history() == ["a", "b"]
    assert not history.add_item("   ")


def test_bounded(qapp, tmp_path):
    history = ClipboardHistory(tmp_path / ClipboardHistory.FILE_NAME, max_items=3)
    for text in ["1", "2", "3", "4"]:
        history.add_item(text)
    assert history.get_history() == ["4", "3", "2"]
    assert history.get_history(limit=1) == ["4"]


def test_normalizes_line_endings(qapp, tmp_path):
    history = ClipboardHistory(tmp_path / ClipboardHistory.FILE_NAME)
    history.add_item("  x\r\ny  ")
    assert history.get_history() == ["x\ny"]


def test_persisted(qapp, tmp_path):
    path = tmp_path / ClipboardHistory.FILE_NAME
    ClipboardHistory(path).add_item("keep me")
    assert ClipboardHistory(path).get_history() == ["keep me"]


def test_search_and_clear(qapp, tmp_path):
    history = ClipboardHistory(tmp_path / ClipboardHistory.FILE_NAME)
    history.add_item("Hello World")
    history.add_item("other")
    assert history.search_history("hello") == ["Hello World"]
    assert history.search_history("") == ["other", "Hello World"]
    history.clear_history()
    assert history.get_history() == []


def test_monitor_needs_gui_application(qapp, tmp_path):
    history = ClipboardHistory(tmp_path / ClipboardHistory.FILE_NAME)
    assert history.start_monitor() is False
    history.stop()
