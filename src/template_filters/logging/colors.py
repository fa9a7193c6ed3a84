"""ANSI 256-color escapes used by the colored log formatter."""

import logging

RESET = "\033[0m"

RED = "\033[38;5;196m"
YELLOW = "\033[38;5;226m"
CYAN = "\033[38;5;51m"
LIGHT_BLUE = "\033[38;5;153m"
MAGENTA = "\033[38;5;201m"

COMPONENT = MAGENTA
FIELDS = LIGHT_BLUE

LEVEL_COLORS = {
    logging.DEBUG: LIGHT_BLUE,
    logging.INFO: CYAN,
    logging.WARNING: YELLOW,
    logging.ERROR: RED,
    logging.CRITICAL: RED,
}


def level_color(levelno: int) -> str:
    """Color for a record level; unknown levels print uncolored."""
    return LEVEL_COLORS.get(levelno, RESET)
