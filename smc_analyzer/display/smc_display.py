"""
SMC Display Functions

`describe` renders a plain multi-line summary of an AnalysisResult (for
logs, chat panels, alerts). `print_smc_summary` prints a colored variant
for the terminal.
"""

from typing import List

from ..engines.data_types import AnalysisResult, KeyLevel
from .colors import Colors, direction_color

MAX_ITEMS = 3


def describe(result: AnalysisResult) -> str:
    """
    Human-readable multi-line summary.

    Shows:
    - Trend / bias header
    - Up to 3 active order blocks
    - Up to 3 open fair value gaps
    - Up to 3 most recent structure breaks
    - Premium/discount band
    """
    lines: List[str] = []

    lines.append("SMC Analysis")
    lines.append(f"Trend: {result.trend.value.upper()} | Bias: {result.bias.value.upper()}")
    lines.append("")

    active_obs = result.active_order_blocks()
    if active_obs:
        lines.append(f"Order Blocks ({len(active_obs)} active)")
        for ob in active_obs[:MAX_ITEMS]:
            lines.append(
                f"  • {ob.kind.value} OB @ {ob.zone_bottom:.2f}-{ob.zone_top:.2f} [{ob.strength.value}]"
            )
        lines.append("")

    open_fvgs = result.open_fair_value_gaps()
    if open_fvgs:
        lines.append(f"Fair Value Gaps ({len(open_fvgs)} unfilled)")
        for fvg in open_fvgs[:MAX_ITEMS]:
            lines.append(f"  • {fvg.kind.value} FVG @ {fvg.zone_bottom:.2f}-{fvg.zone_top:.2f}")
        lines.append("")

    if result.structure_breaks:
        lines.append("Recent Structure")
        for brk in result.structure_breaks[-MAX_ITEMS:]:
            lines.append(
                f"  • {brk.kind.value.upper()} {brk.direction.value} @ {brk.broken_level:.2f}"
            )
        lines.append("")

    pd_zone = result.premium_discount
    if pd_zone:
        lines.append("Premium/Discount")
        lines.append(f"  EQ: {pd_zone.equilibrium:.2f}")
        lines.append(
            f"  Premium: {pd_zone.premium_band.bottom:.2f} - {pd_zone.premium_band.top:.2f}"
        )
        lines.append(
            f"  Discount: {pd_zone.discount_band.bottom:.2f} - {pd_zone.discount_band.top:.2f}"
        )

    return "\n".join(lines).rstrip("\n")


def _format_level(level: KeyLevel) -> str:
    stars = "★" * max(1, int(round(level.strength)))
    return f"{level.price:>12,.2f}  {level.label:<14} {Colors.YELLOW}{stars}{Colors.RESET}"


def print_smc_summary(result: AnalysisResult, show_levels: bool = True) -> None:
    """Print a colored SMC summary to the terminal."""
    print(f"\n{Colors.BOLD}{Colors.CYAN}┌{'─' * 58}┐{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.CYAN}│  SMART MONEY CONCEPTS{' ' * 36}│{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.CYAN}└{'─' * 58}┘{Colors.RESET}")

    trend_color = direction_color(result.trend)
    bias_color = direction_color(result.bias)
    print(
        f"  {Colors.BOLD}Trend:{Colors.RESET} {trend_color}{result.trend.value.upper()}{Colors.RESET}  │  "
        f"{Colors.BOLD}Bias:{Colors.RESET} {bias_color}{result.bias.value.upper()}{Colors.RESET}"
    )

    if result.last_close is not None and result.premium_discount:
        zone = result.premium_discount.zone_of(result.last_close)
        print(f"  {Colors.BOLD}Price:{Colors.RESET} {result.last_close:,.2f} ({zone})")

    if result.is_empty:
        print(f"  {Colors.DIM}No structure detected{Colors.RESET}")
        return

    active_obs = result.active_order_blocks()
    print(f"\n  {Colors.BOLD}Order Blocks{Colors.RESET} {Colors.DIM}({len(active_obs)} active){Colors.RESET}")
    for ob in active_obs[:MAX_ITEMS]:
        color = direction_color(ob.kind)
        print(
            f"    {color}■{Colors.RESET} {ob.kind.value:<8} "
            f"{ob.zone_bottom:,.2f} - {ob.zone_top:,.2f}  [{ob.strength.value}]"
        )

    open_fvgs = result.open_fair_value_gaps()
    print(f"\n  {Colors.BOLD}Fair Value Gaps{Colors.RESET} {Colors.DIM}({len(open_fvgs)} unfilled){Colors.RESET}")
    for fvg in open_fvgs[:MAX_ITEMS]:
        color = direction_color(fvg.kind)
        print(
            f"    {color}▭{Colors.RESET} {fvg.kind.value:<8} "
            f"{fvg.zone_bottom:,.2f} - {fvg.zone_top:,.2f}  "
            f"{Colors.DIM}{fvg.fill_percentage:.0f}% filled{Colors.RESET}"
        )

    if result.structure_breaks:
        print(f"\n  {Colors.BOLD}Recent Structure{Colors.RESET}")
        for brk in result.structure_breaks[-MAX_ITEMS:]:
            color = direction_color(brk.direction)
            arrow = "↑" if brk.direction.value == "bullish" else "↓"
            print(f"    {color}{arrow} {brk.kind.value.upper():<5}{Colors.RESET} @ {brk.broken_level:,.2f}")

    if result.liquidity_sweeps:
        last = result.liquidity_sweeps[-1]
        print(
            f"\n  {Colors.BOLD}Sweeps:{Colors.RESET} {len(result.liquidity_sweeps)} "
            f"{Colors.DIM}(last: {last.side.value} @ {last.swept_level:,.2f}){Colors.RESET}"
        )

    if show_levels and result.key_levels:
        print(f"\n  {Colors.BOLD}Key Levels{Colors.RESET}")
        for level in result.key_levels:
            print(f"    {_format_level(level)}")
