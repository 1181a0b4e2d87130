# __main__.py
import logging
import sys

import PySide6.QtAsyncio as QtAsyncio
from PySide6.QtWidgets import QApplication

from schedule_editor.data.document_store import DocumentStore
from schedule_editor.data.local_cache import LocalCache, load_config, load_hour_table
from schedule_editor.gui.main_window import MainWindow
from schedule_editor.settings import DATA_DIR, LOG_FILE, LOG_LEVEL
from schedule_editor.sync.remote_client import RemoteSyncClient
from schedule_editor.sync.transport import GitHubContentsTransport
from schedule_editor.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main():
    setup_logging(LOG_LEVEL, LOG_FILE)

    cache = LocalCache(DATA_DIR)
    config = load_config(cache)
    store = DocumentStore(cache, load_hour_table(cache))
    store.restore_from_cache()
    client = RemoteSyncClient(store, GitHubContentsTransport(config.token))
    logger.info("캐시 위치: %s", DATA_DIR)

    app = QApplication(sys.argv)
    w = MainWindow(store, client, cache, config, transport_factory=GitHubContentsTransport)
    w.show()
    # pull/push 코루틴을 Qt 이벤트 루프 위에서 실행
    QtAsyncio.run(handle_sigint=True)


if __name__ == "__main__":
    main()
