"""
Background filter passes.

Each keystroke starts a new pass over an immutable snapshot of the menu.
A newer pass supersedes every older one: older workers are asked to stop,
and whatever they deliver afterwards is dropped.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, QThread, Signal
from PySide6.QtGui import QTextCharFormat

from menufilter.filtering.status import default_highlight_format, filter_candidates

if TYPE_CHECKING:
    from menufilter.menu.item import Candidate


class FilterWorker(QObject):
    """Worker for running one filter pass in a separate thread"""

    finished = Signal(int, str, object)  # Emitted with (generation, filter_string, statuses)
    error = Signal(int, str)  # Emitted with (generation, message) on error

    def __init__(
        self,
        generation: int,
        candidates: tuple["Candidate", ...],
        filter_string: str,
        highlight_format: QTextCharFormat,
    ) -> None:
        super().__init__()
        self.generation = generation
        self.candidates = candidates
        self.filter_string = filter_string
        self.highlight_format = highlight_format
        self._cancelled = False

    def cancel(self) -> None:
        """Ask a running pass to stop early; its result will be discarded anyway"""
        self._cancelled = True

    def is_cancelled(self) -> bool:
        return self._cancelled

    def run(self) -> None:
        """Evaluate every candidate"""
        try:
            statuses = filter_candidates(
                self.candidates,
                self.filter_string,
                self.highlight_format,
                should_stop=self.is_cancelled,
            )
            self.finished.emit(self.generation, self.filter_string, statuses)
        except Exception as e:
            import traceback

            print(f"[Filter] FilterWorker error: {e}")
            traceback.print_exc()
            self.error.emit(self.generation, str(e))


class FilterRunner(QObject):
    """
    Runs filter passes off the UI thread.

    Only the newest pass is reported through results_ready.
    """

    results_ready = Signal(str, object)  # Emitted with (filter_string, statuses)
    error = Signal(str)

    def __init__(
        self,
        highlight_format: QTextCharFormat | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.highlight_format = highlight_format if highlight_format is not None else default_highlight_format()
        self._candidates: tuple["Candidate", ...] = ()
        self._generation = 0
        self._passes: dict[int, tuple[QThread, FilterWorker]] = {}

    @property
    def generation(self) -> int:
        """Number of the newest pass requested"""
        return self._generation

    def set_candidates(self, candidates: Iterable["Candidate"]) -> None:
        """Replace the snapshot used by future passes"""
        self._candidates = tuple(candidates)

    def request(self, filter_string: str) -> int:
        """Start a pass for filter_string, superseding any pass still running"""
        self._generation += 1
        generation = self._generation

        for _, running in self._passes.values():
            running.cancel()

        thread = QThread()
        worker = FilterWorker(generation, self._candidates, filter_string, self.highlight_format)
        worker.moveToThread(thread)

        # Connect signals
        worker.finished.connect(self._on_worker_finished)
        worker.error.connect(self._on_worker_error)
        thread.started.connect(worker.run)

        self._passes[generation] = (thread, worker)
        thread.start()
        return generation

    def shutdown(self) -> None:
        """Stop every running pass and wait for the threads"""
        for generation in list(self._passes):
            _, worker = self._passes[generation]
            worker.cancel()
            self._finish_pass(generation)

    def _finish_pass(self, generation: int) -> None:
        entry = self._passes.pop(generation, None)
        if entry is None:
            return
        thread, _ = entry
        thread.quit()
        thread.wait()

    def _on_worker_finished(self, generation: int, filter_string: str, statuses: object) -> None:
        """Handle a completed pass"""
        self._finish_pass(generation)

        if generation != self._generation:
            return  # Superseded by a newer pass

        self.results_ready.emit(filter_string, statuses)

    def _on_worker_error(self, generation: int, message: str) -> None:
        """Handle a failed pass"""
        self._finish_pass(generation)

        if generation == self._generation:
            self.error.emit(message)
