"""Terminal-safe output and logging setup.

Detects terminal encoding and provides ASCII alternatives for the Unicode
icons used in reports, so non-UTF-8 consoles (legacy Windows code pages,
some CI runners) never crash on output.
"""
import locale
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler


# Unicode to ASCII icon mapping
ICON_MAP = {
    '✓': '[OK]',
    '✗': '[FAIL]',
    '⚠': '[WARN]',
    '→': '->',
    '…': '...',
    '•': '*',
    '│': '|',
    '─': '-',
}

LOG_FORMAT = "%(name)s: %(message)s"


def detect_terminal_encoding() -> str:
    """Detect the terminal's encoding capability.

    Returns:
        str: Terminal encoding ('utf-8', 'cp1252', 'ascii', etc.)
    """
    if getattr(sys.stdout, 'encoding', None):
        return sys.stdout.encoding.lower()

    try:
        return locale.getpreferredencoding().lower()
    except (LookupError, ValueError):
        return 'ascii'


def is_utf8_capable() -> bool:
    """Check if the terminal can handle UTF-8 Unicode characters."""
    return detect_terminal_encoding().replace('-', '').replace('_', '') == 'utf8'


def sanitize_for_terminal(text: str) -> str:
    """Replace Unicode icons with ASCII equivalents if terminal doesn't support UTF-8.

    Args:
        text: Text potentially containing Unicode icons

    Returns:
        str: Sanitized text safe for current terminal
    """
    if is_utf8_capable():
        return text

    sanitized = text
    for unicode_char, ascii_replacement in ICON_MAP.items():
        sanitized = sanitized.replace(unicode_char, ascii_replacement)
    return sanitized


def setup_logging(verbose: bool = False, console=None) -> logging.Logger:
    """Route the ``stylesweep`` logger through a Rich handler.

    Calling it again only adjusts the level; handlers are never duplicated.

    Args:
        verbose: DEBUG when True, WARNING otherwise
        console: Optional Rich console to log to (defaults to stderr)

    Returns:
        The configured ``stylesweep`` logger
    """
    logger = logging.getLogger('stylesweep')
    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console or Console(stderr=True), show_time=False, show_path=verbose, markup=False)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
