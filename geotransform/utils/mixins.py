"""Utility mixin classes"""

__all__ = ['LoggingMixin']

import logging
from typing import Optional, Set, Tuple


class LoggingMixin:  # pylint: disable=too-few-public-methods
    """
    Gives the inheriting class a logger named after its module and class,
    so that it nests under the `geotransform` package logger.
    """
    logger: logging.Logger

    WARNED_ONCE: Set[Tuple[str, str]] = set()

    def __init__(self, logstr: Optional[str] = None):
        _class = self.__class__
        module_name = _class.__module__
        classname = _class.__name__
        if logstr:
            classname += f'.{logstr}'

        logstr = f"{classname}" if module_name == "builtins" else f"{module_name}.{classname}"

        self.logger = logging.getLogger(logstr)

    @classmethod
    def _set_warned_once(cls, msg: str):
        """Records a message as already warned for this class"""
        LoggingMixin.WARNED_ONCE.add((cls.__name__, msg))

    def warn_once(self, msg: str, *args, **kwargs):
        """Logs a warning only once per message and class"""
        if (self.__class__.__name__, msg) in LoggingMixin.WARNED_ONCE:
            return

        self.logger.warning(msg, *args, **kwargs)
        self._set_warned_once(msg)
