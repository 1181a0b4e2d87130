# gui/schedule_table.py
from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QTableWidget, QTableWidgetItem, QHeaderView, QAbstractItemView
)

from schedule_editor.logic.table_view import TableView

WEEKEND_BG = QColor("#fde8e8")
WEEKEND_FG = QColor("#c0392b")
FIXED_COLS = 2   # ID, 이름


class ScheduleTable(QWidget):
    """
    직원 × 날짜 표. 셀 편집은 on_cell_changed(worker_index, day_index, value) 로만 알린다.
    문서 상태는 갖지 않음 (build_table 결과를 그대로 그림).
    """

    def __init__(self, on_cell_changed: Callable[[int, int, str], None]):
        super().__init__()
        self.on_cell_changed = on_cell_changed
        self._rendering = False
        self._day_count = 0

        v = QVBoxLayout(self)
        v.setContentsMargins(0, 0, 0, 0)

        self.placeholder = QLabel('데이터가 없거나 JSON 형식이 올바르지 않습니다 ("meta", "workers" 필요)')
        self.placeholder.setAlignment(Qt.AlignCenter)
        v.addWidget(self.placeholder)

        self.table = QTableWidget(0, 0)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.setEditTriggers(
            QAbstractItemView.DoubleClicked | QAbstractItemView.EditKeyPressed | QAbstractItemView.AnyKeyPressed
        )
        self.table.verticalHeader().setVisible(False)
        self.table.itemChanged.connect(self._on_item_changed)
        v.addWidget(self.table)

    def render(self, view: Optional[TableView]):
        self._rendering = True
        try:
            if view is None:
                self.table.setRowCount(0)
                self.table.setColumnCount(0)
                self.table.setVisible(False)
                self.placeholder.setVisible(True)
                return
            self.placeholder.setVisible(False)
            self.table.setVisible(True)

            self._day_count = len(view.headers)
            self.table.setColumnCount(FIXED_COLS + self._day_count + 1)
            self.table.setRowCount(len(view.rows))

            labels = ["ID", "직원"] + [f"{h.label}\n{h.weekday}" for h in view.headers] + ["합계"]
            self.table.setHorizontalHeaderLabels(labels)
            for h in view.headers:
                if h.weekend:
                    self.table.horizontalHeaderItem(FIXED_COLS + h.index).setForeground(QBrush(WEEKEND_FG))

            for row in view.rows:
                r = row.worker_index
                self.table.setItem(r, 0, self._readonly("" if row.worker_id is None else str(row.worker_id)))
                name_item = self._readonly(row.name)
                name_item.setToolTip(row.name)
                self.table.setItem(r, 1, name_item)
                for cell in row.cells:
                    item = QTableWidgetItem(cell.value)
                    item.setTextAlignment(Qt.AlignCenter)
                    if cell.weekend:
                        item.setBackground(QBrush(WEEKEND_BG))
                    self.table.setItem(r, FIXED_COLS + cell.day_index, item)
                self.table.setItem(r, self._total_col(), self._readonly(str(row.total)))

            header = self.table.horizontalHeader()
            header.setSectionResizeMode(QHeaderView.Fixed)
            for c in range(FIXED_COLS, FIXED_COLS + self._day_count):
                self.table.setColumnWidth(c, 38)
            self.table.setColumnWidth(0, 40)
            self.table.setColumnWidth(1, 160)
        finally:
            self._rendering = False

    def update_total(self, worker_index: int, total: int):
        self._rendering = True
        try:
            self.table.setItem(worker_index, self._total_col(), self._readonly(str(total)))
        finally:
            self._rendering = False

    # ---------------- 내부 ----------------
    def _total_col(self) -> int:
        return FIXED_COLS + self._day_count

    def _readonly(self, text: str) -> QTableWidgetItem:
        item = QTableWidgetItem(text)
        item.setFlags(item.flags() & ~Qt.ItemIsEditable)
        return item

    def _on_item_changed(self, item: QTableWidgetItem):
        if self._rendering:
            return
        day_index = item.column() - FIXED_COLS
        if not 0 <= day_index < self._day_count:
            return
        self.on_cell_changed(item.row(), day_index, item.text().strip())
