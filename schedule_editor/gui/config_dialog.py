# gui/config_dialog.py
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QLineEdit, QPushButton, QMessageBox
)

from schedule_editor.models.connection import ConnectionConfig
from schedule_editor.settings import DEFAULT_BRANCH


class ConfigDialog(QDialog):
    """저장소 연결 설정 (토큰, 소유자, 저장소, 파일 경로, 브랜치)."""

    def __init__(self, parent, config: ConnectionConfig):
        super().__init__(parent)
        self.setWindowTitle("연결 설정")
        self.config = config

        v = QVBoxLayout(self)
        form = QGridLayout()
        r = 0

        def row(label, value, placeholder=""):
            nonlocal r
            line = QLineEdit(value)
            line.setPlaceholderText(placeholder)
            form.addWidget(QLabel(label), r, 0)
            form.addWidget(line, r, 1)
            r += 1
            return line

        self.token_edit = row("토큰*", config.token, "ghp_...")
        self.token_edit.setEchoMode(QLineEdit.Password)
        self.owner_edit = row("소유자", config.owner, "사용자 또는 조직")
        self.repo_edit = row("저장소*", config.repo)
        self.path_edit = row("파일 경로*", config.path, "data/grafik.json")
        self.branch_edit = row("브랜치", config.branch, DEFAULT_BRANCH)
        v.addLayout(form)

        btns = QHBoxLayout()
        btns.addStretch(1)
        cancel_btn = QPushButton("취소")
        save_btn = QPushButton("저장")
        btns.addWidget(cancel_btn)
        btns.addWidget(save_btn)
        v.addLayout(btns)

        cancel_btn.clicked.connect(self.reject)
        save_btn.clicked.connect(self.on_save)

    def collect(self) -> ConnectionConfig:
        return ConnectionConfig.from_dict({
            "token": self.token_edit.text(),
            "owner": self.owner_edit.text(),
            "repo": self.repo_edit.text(),
            "path": self.path_edit.text(),
            "branch": self.branch_edit.text(),
        })

    def on_save(self):
        cfg = self.collect()
        if not cfg.is_complete():
            QMessageBox.warning(self, "확인", "토큰, 저장소, 파일 경로는 필수입니다.")
            return
        self.config = cfg
        self.accept()
