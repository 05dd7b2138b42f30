"""
rotprop.log - logging facade with proper Python exception handling.

Usage:
    from rotprop import log

    log.debug("Hello")

    try:
        do_something()
    except Exception as e:
        log.warn(e, "Failed to do something")  # includes traceback

Messages go to the standard ``logging`` logger named "rotprop", so the host
application decides on handlers and formatting.
"""

import logging
import traceback

_logger = logging.getLogger("rotprop")
_logger.addHandler(logging.NullHandler())


def debug(msg_or_exc, context: str = ""):
    """Log debug message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(_logger.debug, msg_or_exc, context)
    else:
        _logger.debug(str(msg_or_exc))


def warn(msg_or_exc, context: str = ""):
    """Log warning message or exception with context."""
    if isinstance(msg_or_exc, BaseException):
        _log_exception(_logger.warning, msg_or_exc, context)
    else:
        _logger.warning(str(msg_or_exc))


def _log_exception(log_func, exc: BaseException, context: str):
    """Format and log exception with traceback."""
    exc_type = type(exc).__name__
    exc_msg = str(exc)

    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    if context:
        full_msg = f"{context}: {exc_type}: {exc_msg}\n{tb}"
    else:
        full_msg = f"{exc_type}: {exc_msg}\n{tb}"

    log_func(full_msg)
