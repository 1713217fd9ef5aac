"""Logging helpers.

Library modules log through `get_logger(__name__)`. Handlers are left to
the host application; the package logger only carries a NullHandler.
"""

import logging

logging.getLogger("geotrace").addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
