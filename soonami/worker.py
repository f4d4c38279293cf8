import logging
import threading
from collections.abc import Callable

from soonami import http, usgs
from soonami.data import quake

logger = logging.getLogger(__name__)


class QuakeWorker:
    """
    Run one fetch-and-extract on a background thread and signal once when
    it is done. Callers either register a callback or block in wait().
    """

    def __init__(self, fetcher: usgs.Fetcher):
        self.fetcher = fetcher
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[["QuakeWorker"], None]] = []
        self._result: quake.QuakeResult | None = None
        self._error: Exception | None = None
        self._thread: threading.Thread | None = None

    @property
    def done(self) -> bool:
        return self._done.is_set()

    @property
    def error(self) -> Exception | None:
        return self._error

    def start(self) -> "QuakeWorker":
        if self._thread is not None:
            raise RuntimeError("worker already started")

        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        return self

    def add_done_callback(self, fn: Callable[["QuakeWorker"], None]):
        with self._lock:
            if not self._done.is_set():
                self._callbacks.append(fn)
                return
        fn(self)

    def wait(self, timeout: float | None = None) -> quake.QuakeResult:
        if not self._done.wait(timeout=timeout):
            raise TimeoutError(f"no result after {timeout} seconds")

        if self._error is not None:
            raise self._error

        if self._result is None:
            return quake.NotAvailable(reason="no result")
        return self._result

    def _run(self):
        logger.debug("worker started")
        try:
            self._result = usgs.get_quake_data(fetcher=self.fetcher)
        except http.FetchError as e:
            logger.error(f"fetch failed: {e}")
            self._error = e
        except Exception as e:
            logger.exception("worker failed")
            self._error = e

        with self._lock:
            self._done.set()
            callbacks, self._callbacks = self._callbacks, []
        logger.debug("worker done")

        for fn in callbacks:
            try:
                fn(self)
            except Exception:
                logger.exception("done callback failed")
