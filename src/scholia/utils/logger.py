"""Logging helper: every logger lives under the ``scholia.`` namespace."""

import logging


def get_logger(name: str) -> logging.Logger:
    """
    Get a stdlib logger for the given module name.

    Examples:
        >>> get_logger("mymodule").name
        'scholia.mymodule'
        >>> get_logger("scholia.core.footnotes").name
        'scholia.core.footnotes'
    """
    if not (name == "scholia" or name.startswith("scholia.")):
        name = f"scholia.{name}"
    return logging.getLogger(name)
