"""
Console formatting for the worker wallet demo.
Boxes, wallet panels and status messages share one width and palette.
"""

from decimal import Decimal
from typing import Optional


# ANSI color codes for console styling
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


def paint(text: str, *styles: str) -> str:
    return "".join(styles) + text + Colors.ENDC


class MenuFormatter:
    """Console output for the demo flow"""

    def __init__(self, width: int = 80):
        self.width = width

    @property
    def inner_width(self) -> int:
        return self.width - 2

    def _frame(self, left: str, fill: str, right: str, color: str) -> str:
        return paint(left + fill * self.inner_width + right, color)

    def _message(self, icon: str, color: str, message: str):
        print("\n" + paint(f"{icon} {message}", color))

    def print_header(self, title: str, subtitle: Optional[str] = None):
        """Double-lined title box, with an optional subtitle row"""
        rows = [(title, Colors.BOLD)]
        if subtitle:
            rows.append((subtitle, Colors.OKBLUE))

        print("\n" + self._frame("╔", "═", "╗", Colors.HEADER))
        for text, style in rows:
            border = paint("║", Colors.HEADER)
            print(border + paint(text.center(self.inner_width), style) + border)
        print(self._frame("╚", "═", "╝", Colors.HEADER))

    def print_status_bar(self, network: str, balance: Decimal, active_workers: int = 0):
        """Network, treasury balance and worker count on one line"""
        status_line = f"Network: {network} | Treasury: {balance:.6f} ADA | Active workers: {active_workers}"
        border = paint("│", Colors.OKBLUE)

        print(self._frame("┌", "─", "┐", Colors.OKBLUE))
        print(f"{border} {status_line:<{self.width - 4}} {border}")
        print(self._frame("└", "─", "┘", Colors.OKBLUE))

    def print_section(self, title: str):
        rule = "─" * max(self.width - len(title) - 4, 0)
        print("\n" + paint("┌─ ", Colors.OKBLUE) + paint(title, Colors.BOLD) + " " + paint(rule, Colors.OKBLUE))

    def print_wallet_info(self, label: str, address: str, balance: Decimal):
        """Labelled address and ADA balance"""
        border = paint("│", Colors.OKBLUE)
        print(f"{border} {paint(label, Colors.BOLD)}")
        print(f"{border}   Address:   {address}")
        print(f"{border}   Balance:   {balance:.6f} ADA")
        print(border)

    def print_warning(self, message: str):
        self._message("⚠ Warning:", Colors.WARNING, message)

    def print_success(self, message: str):
        self._message("✓", Colors.OKGREEN, message)

    def print_error(self, message: str):
        self._message("✗ Error:", Colors.FAIL, message)

    def print_info(self, message: str):
        self._message("ℹ", Colors.OKBLUE, message)
