# tests/test_gui.py

import logging
import os

# Qt needs a platform plugin even when nothing is shown on screen.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from node_viewer.core.config_manager import ViewerSettings, load_settings
from node_viewer.core.file_sources import AsyncFileSource, NativeFileSource
from node_viewer.core.models import Loaded, Loading
from node_viewer.gui.content_view import TAB_ELEMENTS, TAB_HEX
from node_viewer.gui.main_window import MainWindow, WINDOW_TITLE

from fakes import ImmediateExecutor, SurfaceFactory


# pytest fixture to create a QApplication instance, required for any Qt widget tests.
@pytest.fixture(scope="session")
def qapp():
    """Creates a QApplication instance for the test session."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def make_window(qapp, tmp_path):
    windows = []

    def _make(file_source):
        window = MainWindow(ViewerSettings(), settings_path=tmp_path / "settings.json", file_source=file_source)
        windows.append(window)
        return window

    yield _make
    for window in windows:
        window.close()


def test_main_window_creation(make_window):
    window = make_window(NativeFileSource(lambda: None))
    assert window.windowTitle() == WINDOW_TITLE
    assert window.open_action.isEnabled()
    assert window.content_view.isHidden()
    assert window.status_widget.status_message.text().startswith("No file opened")


def test_open_xml_file_shows_elements(make_window, tmp_path):
    xml_file = tmp_path / "sample.xml"
    xml_file.write_bytes(b"<a><b/><c>text</c></a>")
    window = make_window(NativeFileSource(lambda: str(xml_file)))

    window.open_action.trigger()

    assert isinstance(window.controller.current_state(), Loaded)
    assert window.status_widget.status_message.text() == "File: sample.xml"
    assert not window.content_view.isHidden()
    elements = window.content_view.element_list
    assert [elements.item(i).text() for i in range(elements.count())] == ["a", "b", "c"]
    assert window.content_view.tabs.currentIndex() == TAB_ELEMENTS
    assert window.log_viewer.model().rowCount() == 2


def test_binary_file_lands_on_hex_tab(make_window, tmp_path):
    blob = tmp_path / "blob.bin"
    blob.write_bytes(bytes(range(64)))
    window = make_window(NativeFileSource(lambda: str(blob)))

    window.open_action.trigger()

    assert window.content_view.tabs.currentIndex() == TAB_HEX
    assert window.content_view.hex_view.toPlainText().startswith("00000000  00 01 02")


def test_cancelled_dialog_shows_error(make_window):
    window = make_window(NativeFileSource(lambda: None))

    window.open_action.trigger()

    assert window.status_widget.status_message.text() == "Error opening file: No file selected"
    assert window.content_view.isHidden()


def test_async_picker_updates_on_redraw_tick(make_window, tmp_path):
    text_file = tmp_path / "notes.txt"
    text_file.write_bytes(b"hello")
    factory = SurfaceFactory()
    window = make_window(AsyncFileSource(factory, reader=ImmediateExecutor()))

    window.open_action.trigger()
    assert isinstance(window.controller.current_state(), Loading)
    assert window.status_widget.status_message.text() == "Loading..."

    factory.surfaces[0].select(str(text_file))
    window.controller.poll()

    assert window.status_widget.status_message.text() == "File: notes.txt"
    assert window.content_view.text_view.toPlainText() == "hello"


def test_theme_and_scale_choices_are_saved(make_window, tmp_path):
    window = make_window(NativeFileSource(lambda: None))

    window.theme_actions["dark"].trigger()
    window.scale_actions[1.5].trigger()

    saved = load_settings(tmp_path / "settings.json")
    assert saved.theme == "dark"
    assert saved.ui_scale == 1.5
    assert window.theme_actions["dark"].isChecked()


def test_state_changes_are_logged(make_window, caplog):
    window = make_window(NativeFileSource(lambda: None))

    with caplog.at_level(logging.DEBUG, logger="node_viewer.gui.viewer_controller"):
        window.open_action.trigger()

    messages = [record.getMessage() for record in caplog.records]
    assert "Loading state is now LOADING." in messages
    assert "Loading state is now ERROR." in messages
