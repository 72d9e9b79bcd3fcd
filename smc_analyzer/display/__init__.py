"""Display utilities for SMC analysis output."""

from .colors import Colors, direction_color
from .smc_display import describe, print_smc_summary

__all__ = [
    "Colors",
    "direction_color",
    "describe",
    "print_smc_summary",
]
