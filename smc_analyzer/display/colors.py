"""ANSI color codes and direction coloring for terminal output."""

from ..engines.data_types import Bias, Direction, Trend

_ANSI_CODES = {
    "RESET": "\033[0m",
    "BOLD": "\033[1m",
    "DIM": "\033[2m",
    "RED": "\033[91m",
    "GREEN": "\033[92m",
    "YELLOW": "\033[93m",
    "BLUE": "\033[94m",
    "MAGENTA": "\033[95m",
    "CYAN": "\033[96m",
}


class Colors:
    """ANSI escape codes for terminal coloring."""

    RESET = _ANSI_CODES["RESET"]
    BOLD = _ANSI_CODES["BOLD"]
    DIM = _ANSI_CODES["DIM"]

    RED = _ANSI_CODES["RED"]
    GREEN = _ANSI_CODES["GREEN"]
    YELLOW = _ANSI_CODES["YELLOW"]
    BLUE = _ANSI_CODES["BLUE"]
    MAGENTA = _ANSI_CODES["MAGENTA"]
    CYAN = _ANSI_CODES["CYAN"]

    @classmethod
    def disable(cls) -> None:
        """Blank every code (for pipes and --no-color)."""
        for name in _ANSI_CODES:
            setattr(cls, name, "")

    @classmethod
    def enable(cls) -> None:
        """Restore the ANSI codes."""
        for name, code in _ANSI_CODES.items():
            setattr(cls, name, code)

    @classmethod
    def enabled(cls) -> bool:
        return cls.RESET != ""


def direction_color(value) -> str:
    """Green for bullish/long, red for bearish/short, yellow otherwise."""
    if value in (Direction.BULLISH, Trend.BULLISH, Bias.LONG):
        return Colors.GREEN
    if value in (Direction.BEARISH, Trend.BEARISH, Bias.SHORT):
        return Colors.RED
    return Colors.YELLOW
