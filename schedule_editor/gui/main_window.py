# gui/main_window.py
import asyncio
import logging
from datetime import datetime

from PySide6.QtGui import QAction, QActionGroup
from PySide6.QtWidgets import (
    QMainWindow, QStackedWidget, QLabel, QMessageBox, QInputDialog, QLineEdit
)

from schedule_editor.data.document_store import DocumentStore
from schedule_editor.data.local_cache import LocalCache, save_config
from schedule_editor.exceptions import (
    AuthenticationError, ConflictError, DocumentParseError, ScheduleEditorError, SyncInProgressError,
)
from schedule_editor.gui.code_editor import CodeEditor
from schedule_editor.gui.config_dialog import ConfigDialog
from schedule_editor.gui.schedule_table import ScheduleTable
from schedule_editor.logic.table_view import build_table
from schedule_editor.models.connection import ConnectionConfig
from schedule_editor.sync.remote_client import RemoteSyncClient, default_commit_message

logger = logging.getLogger(__name__)

VIEW_TABLE, VIEW_CODE = 0, 1


class MainWindow(QMainWindow):
    def __init__(self, store: DocumentStore, client: RemoteSyncClient, cache: LocalCache,
                 config: ConnectionConfig, transport_factory):
        super().__init__()
        self.setWindowTitle("근무표 JSON 편집기")
        self.resize(1280, 800)

        self.store = store
        self.client = client
        self.cache = cache
        self.config = config
        self.transport_factory = transport_factory  # 토큰 → 전송 계층
        self._updating_editor = False

        self._build_ui()
        self._update_status_display()
        self._set_editor_text(self.store.get_text())
        self.switch_view(VIEW_TABLE)

    # ---------------- UI ----------------
    def _build_ui(self):
        tb = self.addToolBar("main")
        tb.setMovable(False)

        act_cfg = QAction("설정", self)
        act_cfg.triggered.connect(self.open_config)
        tb.addAction(act_cfg)
        tb.addSeparator()

        self.act_pull = QAction("가져오기(Pull)", self)
        self.act_pull.triggered.connect(lambda: asyncio.ensure_future(self.pull()))
        tb.addAction(self.act_pull)

        self.act_push = QAction("저장하기(Push)", self)
        self.act_push.triggered.connect(lambda: asyncio.ensure_future(self.push()))
        tb.addAction(self.act_push)
        tb.addSeparator()

        views = QActionGroup(self)
        self.act_table = QAction("표", self, checkable=True)
        self.act_code = QAction("JSON", self, checkable=True)
        for act in (self.act_table, self.act_code):
            views.addAction(act)
            tb.addAction(act)
        self.act_table.triggered.connect(lambda: self.switch_view(VIEW_TABLE))
        self.act_code.triggered.connect(lambda: self.switch_view(VIEW_CODE))

        self.stack = QStackedWidget()
        self.schedule = ScheduleTable(on_cell_changed=self.on_cell_changed)
        self.editor = CodeEditor()
        self.editor.textChanged.connect(self.on_editor_changed)
        self.stack.addWidget(self.schedule)   # VIEW_TABLE
        self.stack.addWidget(self.editor)     # VIEW_CODE
        self.setCentralWidget(self.stack)

        # 상태바: 저장소 / 파일 / 메시지
        self.status = self.statusBar()
        self.lbl_repo = QLabel("")
        self.lbl_file = QLabel("")
        self.status.addPermanentWidget(self.lbl_repo)
        self.status.addPermanentWidget(self.lbl_file)

    def _update_status_display(self):
        if self.config.owner and self.config.repo:
            self.lbl_repo.setText(f"저장소: {self.config.owner}/{self.config.repo}")
            self.lbl_file.setText(f"파일: {self.config.path}")
        else:
            self.lbl_repo.setText("저장소: (미설정)")
            self.lbl_file.setText("")

    def _set_editor_text(self, text: str):
        self._updating_editor = True
        try:
            self.editor.setPlainText(text)
        finally:
            self._updating_editor = False

    def _refresh_table(self):
        doc = self.store.get_model()
        view = build_table(doc, self.store.hour_table) if doc is not None else None
        self.schedule.render(view)

    def _set_busy(self, busy: bool):
        self.act_pull.setEnabled(not busy)
        self.act_push.setEnabled(not busy)

    # ---------------- 화면 전환 ----------------
    def switch_view(self, view: int):
        self.stack.setCurrentIndex(view)
        self.act_table.setChecked(view == VIEW_TABLE)
        self.act_code.setChecked(view == VIEW_CODE)
        if view == VIEW_TABLE:
            self._refresh_table()

    # ---------------- 편집 ----------------
    def on_editor_changed(self):
        if self._updating_editor:
            return
        try:
            self.store.load_from_text(self.editor.toPlainText())
        except DocumentParseError as e:
            self.status.showMessage(f"JSON 오류: {e}", 3000)
            return
        self.status.showMessage("수정됨 (push 전)", 2000)

    def on_cell_changed(self, worker_index: int, day_index: int, value: str):
        try:
            self.store.set_shift(worker_index, day_index, value)
        except ScheduleEditorError as e:
            QMessageBox.warning(self, "오류", str(e))
            self._refresh_table()
            return
        self.schedule.update_total(worker_index, self.store.get_aggregate(worker_index))
        self._set_editor_text(self.store.get_text())

    # ---------------- 설정 ----------------
    def open_config(self):
        dlg = ConfigDialog(self, self.config)
        if not dlg.exec():
            return
        self.config = dlg.config
        save_config(self.cache, self.config)
        self.client.transport = self.transport_factory(self.config.token)
        self._update_status_display()
        self.status.showMessage("설정이 저장되었습니다.", 3000)

    def _validate_config(self) -> bool:
        if self.config.is_complete():
            return True
        QMessageBox.warning(self, "설정 오류", "토큰, 저장소, 파일 경로를 먼저 설정하세요.")
        self.open_config()
        return False

    # ---------------- 동기화 ----------------
    async def pull(self):
        if not self._validate_config():
            return
        self.status.showMessage("데이터 가져오는 중...")
        self._set_busy(True)
        try:
            result = await self.client.pull(self.config.location)
        except SyncInProgressError as e:
            self.status.showMessage(str(e), 3000)
            return
        except DocumentParseError as e:
            # 텍스트는 받았으니 JSON 화면에서 고칠 수 있게
            self._set_editor_text(self.store.get_text())
            self.switch_view(VIEW_CODE)
            QMessageBox.warning(self, "JSON 오류", f"원격 문서를 해석하지 못했습니다.\n{e}")
            return
        except ScheduleEditorError as e:
            self._show_sync_error("가져오기 실패", e)
            return
        finally:
            self._set_busy(False)

        self._set_editor_text(self.store.get_text())
        self._refresh_table()
        if result.discarded is not None:
            QMessageBox.information(self, "안내", "push 하지 않은 로컬 변경을 원격 문서로 덮어썼습니다.")
        self.status.showMessage("동기화 완료")

    async def push(self):
        if not self._validate_config():
            return
        message, ok = QInputDialog.getText(
            self, "커밋 메시지", "커밋 메시지:", QLineEdit.Normal, default_commit_message()
        )
        if not ok:
            return
        self.status.showMessage("변경 내용 저장 중...")
        self._set_busy(True)
        try:
            await self.client.push(self.config.location, message.strip() or None)
        except SyncInProgressError as e:
            self.status.showMessage(str(e), 3000)
            return
        except ConflictError as e:
            QMessageBox.warning(self, "충돌", f"원격 파일이 그 사이 변경되었습니다. 다시 가져온 뒤 저장하세요.\n{e}")
            return
        except ScheduleEditorError as e:
            self._show_sync_error("저장 실패", e)
            return
        finally:
            self._set_busy(False)
        self.status.showMessage(f"저장됨: {datetime.now().strftime('%H:%M:%S')}")

    def _show_sync_error(self, title: str, e: ScheduleEditorError):
        logger.error("%s: %s", title, e)
        if isinstance(e, AuthenticationError):
            QMessageBox.warning(self, title, f"인증 실패. 토큰을 확인하세요.\n{e}")
        else:
            QMessageBox.warning(self, title, str(e))
