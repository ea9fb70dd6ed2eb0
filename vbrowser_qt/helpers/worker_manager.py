from collections.abc import Callable
import logging
import traceback

from PySide6.QtCore import QThreadPool

from vbrowser_qt.workers import BackgroundTask


logger = logging.getLogger(__name__)


class WorkerManager:
    """Submits blocking work to a thread pool; callbacks arrive on the UI thread."""

    def __init__(self, thread_pool=None) -> None:
        self.thread_pool = thread_pool or QThreadPool.globalInstance()

    def submit(
        self,
        fn: Callable[[], object],
        on_result: Callable[[object], None],
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        report_error = on_error or self._on_worker_error

        def _deliver(payload: object) -> None:
            try:
                on_result(payload)
            except Exception:
                report_error(traceback.format_exc())

        task = BackgroundTask(fn)
        task.signals.finished.connect(_deliver)
        task.signals.failed.connect(report_error)
        self.thread_pool.start(task)

    def _on_worker_error(self, trace_text: str) -> None:
        logger.error("Background task failed:\n%s", trace_text)


__all__ = ["WorkerManager"]
