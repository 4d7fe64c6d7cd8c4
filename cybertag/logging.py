import inspect
import logging
from pprint import pformat
from typing import Any, TextIO

from pydantic import BaseModel

ROOT_LOGGER = "cybertag"
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"


class PprintLogger:
    """A logger wrapper that pretty-prints structured messages.

    Dicts, lists and windows are passed through `pformat`; pydantic models
    (mentions, spans, rules, settings) are dumped as indented JSON.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def _format_message(self, msg: Any, pprint: bool = True) -> str:
        if not pprint or isinstance(msg, str):
            return str(msg)
        if isinstance(msg, BaseModel):
            return msg.model_dump_json(indent=2)
        return pformat(msg, width=120, depth=None)

    def debug(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def info(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.info(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def warning(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.warning(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def error(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.error(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def critical(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.critical(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def exception(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.exception(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def __getattr__(self, name: str) -> Any:
        """Delegate any other attributes to the underlying logger."""
        return getattr(self._logger, name)


def setup_logging(
    level: int = logging.INFO,
    name: str | None = None,
    stream: TextIO | None = None,
) -> PprintLogger:
    """Return a PprintLogger for the calling module.

    The logger is named after the caller's module unless `name` is given.
    A stream handler is attached the first time a given logger is set up;
    later calls update its level, and replace it when a stream is given.
    Unnamed calls from inside the package leave level and handlers alone;
    those loggers propagate to the `cybertag` logger, which entry points
    configure with ``setup_logging(level, name="cybertag")``.
    """
    if name is None:
        frame = inspect.currentframe().f_back  # type: ignore[union-attr]
        name = frame.f_globals.get("__name__", ROOT_LOGGER)  # type: ignore[union-attr]
        if name.startswith(ROOT_LOGGER + "."):
            return PprintLogger(logging.getLogger(name))
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if stream is not None:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
    if not logger.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)
    return PprintLogger(logger)
