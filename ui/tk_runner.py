import logging
import threading
import tkinter as tk

logger = logging.getLogger(__name__)


class TkTaskRunner:
    """Runs backend calls on daemon threads and hands results back via after(0, ...)."""

    def __init__(self, widget):
        self._widget = widget

    def run(self, work, on_done):
        def target():
            try:
                result, error = work(), None
            except Exception as e:
                result, error = None, e
            self.post(lambda: on_done(result, error))

        threading.Thread(target=target, daemon=True).start()

    def post(self, fn):
        try:
            self._widget.after(0, fn)
        except (RuntimeError, tk.TclError):
            # window already destroyed
            logger.debug("Dropping callback; window is gone")
