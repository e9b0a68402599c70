from __future__ import annotations

import os

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFrame,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from outer_ignore.project_context import ProjectContext
from outer_ignore.services.dialects import Dialect


class OuterIgnoreBanner(QFrame):
    """
    Bottom banner listing the outer ignore files that also apply to the
    edited file. Activating an entry requests that file be opened.
    """

    openFileRequested = Signal(str)

    def __init__(
        self,
        *,
        project: ProjectContext,
        dialect: Dialect,
        outer_files: tuple[str, ...],
        max_height: int = 100,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._project = project
        self._dialect = dialect
        self._outer_files = tuple(outer_files)
        self._disposed = False

        self.setObjectName("OuterIgnoreBanner")
        self.setFrameShape(QFrame.StyledPanel)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Maximum)
        self.setMaximumHeight(max(40, int(max_height)))

        lay = QVBoxLayout(self)
        lay.setContentsMargins(8, 4, 8, 4)
        lay.setSpacing(2)

        self._title_label = QLabel(self._title_text(), self)
        self._title_label.setObjectName("OuterIgnoreBannerTitle")
        lay.addWidget(self._title_label)

        self._file_list = QListWidget(self)
        self._file_list.setObjectName("OuterIgnoreBannerFiles")
        self._file_list.setFrameShape(QFrame.NoFrame)
        for path in self._outer_files:
            item = QListWidgetItem(self._display_path(path))
            item.setData(Qt.UserRole, path)
            item.setToolTip(path)
            self._file_list.addItem(item)
        self._file_list.itemActivated.connect(self._on_item_activated)
        lay.addWidget(self._file_list)

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    def outer_files(self) -> tuple[str, ...]:
        return self._outer_files

    def title_text(self) -> str:
        return self._title_label.text()

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self.hide()
        self.deleteLater()

    def _title_text(self) -> str:
        count = len(self._outer_files)
        noun = "file" if count == 1 else "files"
        return f"{self._dialect.label} rules also apply from {count} outer {noun}"

    def _display_path(self, path: str) -> str:
        rel = self._project.rel_to_project(path)
        if rel != path:
            return rel
        home = os.path.expanduser("~")
        if path.startswith(home + os.sep):
            return "~" + path[len(home):]
        return path

    def _on_item_activated(self, item: QListWidgetItem) -> None:
        path = item.data(Qt.UserRole)
        if isinstance(path, str) and path:
            self.openFileRequested.emit(path)
