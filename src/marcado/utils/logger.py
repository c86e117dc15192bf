"""Logger lookup for marcado modules.

All loggers live under the ``marcado`` namespace, so applications can
enable parser diagnostics with ``logging.getLogger("marcado").setLevel``.
The library installs no handlers of its own.
"""

from __future__ import annotations

import logging

_ROOT = "marcado"


def get_logger(name: str) -> logging.Logger:
    """Return the stdlib logger for ``name`` inside the marcado namespace.

    Module names already under ``marcado`` are used as is; any other name
    is prefixed.

    Example:
        >>> get_logger("marcado.parser").name
        'marcado.parser'
        >>> get_logger("scratch").name
        'marcado.scratch'
    """
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
