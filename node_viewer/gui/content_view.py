# node_viewer/gui/content_view.py

from typing import Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QTabWidget, QPlainTextEdit, QListWidget, QLabel
)

from node_viewer.core.content_classifier import (
    ContentReport, classify_content, format_hex_dump, format_text_preview
)
from node_viewer.core.models import FileDetails
from .resources import monospace_font

TAB_HEX = 0
TAB_TEXT = 1
TAB_ELEMENTS = 2


class ContentView(QWidget):
    """
    The tabbed view of a loaded file: hex dump, text, and the flat list of
    XML element names. Classification happens here, lazily, when a file is
    shown. A broken XML listing only affects its own tab.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.report: Optional[ContentReport] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.summary_label = QLabel("")
        self.summary_label.setWordWrap(True)

        self.tabs = QTabWidget()
        self.hex_view = self._create_text_panel()
        self.text_view = self._create_text_panel()
        self.element_list = QListWidget()

        self.tabs.addTab(self.hex_view, "Hex")
        self.tabs.addTab(self.text_view, "Text")
        self.tabs.addTab(self.element_list, "XML Elements")

        layout.addWidget(self.summary_label)
        layout.addWidget(self.tabs)

    @staticmethod
    def _create_text_panel() -> QPlainTextEdit:
        panel = QPlainTextEdit()
        panel.setReadOnly(True)
        panel.setLineWrapMode(QPlainTextEdit.NoWrap)
        panel.setFont(monospace_font())
        return panel

    def set_scale(self, scale: float):
        self.hex_view.setFont(monospace_font(scale))
        self.text_view.setFont(monospace_font(scale))

    def show_file(self, details: FileDetails):
        """Renders one loaded file into all three tabs."""
        report = classify_content(details)
        self.report = report

        self.summary_label.setText(f"{report.kind} content, {report.size} bytes. " + " ".join(report.notes))
        self.hex_view.setPlainText(format_hex_dump(details.file_content))
        self.text_view.setPlainText(format_text_preview(details.file_content))

        self.element_list.clear()
        if report.element_error:
            self.element_list.addItem(f"Could not list elements: {report.element_error}")
        elif report.element_names is not None:
            self.element_list.addItems(report.element_names)
        else:
            self.element_list.addItem("Not XML content.")

        # Land on the tab that best matches what was detected.
        if report.is_xml:
            self.tabs.setCurrentIndex(TAB_ELEMENTS)
        elif report.is_text:
            self.tabs.setCurrentIndex(TAB_TEXT)
        else:
            self.tabs.setCurrentIndex(TAB_HEX)

    def clear(self):
        self.report = None
        self.summary_label.setText("")
        self.hex_view.clear()
        self.text_view.clear()
        self.element_list.clear()
