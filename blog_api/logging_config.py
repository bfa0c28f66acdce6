"""
Logging setup for the Blog API.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger.  Every other module only does
``logging.getLogger(__name__)`` and leaves handler wiring to this one
place.  Records are tagged with the id of the request they were logged
under (``-`` outside a request).
"""
import logging
from pathlib import Path

from blog_api.middleware import request_id_var

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def setup_logging(level: str = "INFO", logfile: str | None = None) -> None:
    """
    Configure the root logger.

    Does nothing if the root logger already has handlers, so repeated
    imports of ``blog_api.main`` (tests, reloaders) never duplicate
    output.  Unknown level names fall back to ``INFO``.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    request_id_filter = RequestIdFilter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(request_id_filter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.addFilter(request_id_filter)
        root.addHandler(file_handler)
