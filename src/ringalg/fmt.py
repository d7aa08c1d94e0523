# src/ringalg/fmt.py
from __future__ import annotations

import sys
from typing import Any

from colorama import Fore, Style

from ringalg.runtime import CFG
from ringalg.runtime import current as _rt_current
from ringalg.utility import get_terminal_width


def debug(msg: str) -> None:
    """Emit a `[debug]` line on stderr when the runtime debug flag is on."""
    if _rt_current().debug:
        print(f"{Style.DIM}[debug]{Style.RESET_ALL} {msg}", file=sys.stderr)


def format_number(x: Any, spec: str | None = None) -> str:
    """Format a host number with DISPLAY.FLOAT_FORMAT; exact types print as-is."""
    if isinstance(x, int):
        return str(x)
    if spec is None:
        spec = str(CFG("DISPLAY.FLOAT_FORMAT", ".17g"))
    try:
        return format(x, spec)
    except (TypeError, ValueError):
        return str(x)


def abbreviate(s: str, width: int | None = None, ellipsis: str = "…") -> str:
    """Shorten a long rendering to fit the terminal, keeping head and tail."""
    width = width or max(40, get_terminal_width() - 4)
    if len(s) <= width:
        return s
    half = (width - len(ellipsis)) // 2
    return s[:half] + ellipsis + s[-half:]


def coefficient_lines(poly: Any) -> list[str]:
    """One line per non-zero coefficient, lowest power first."""
    lines = []
    for k in range(poly.degree + 1):
        c = poly.coeff_at(k)
        if c.is_zero():
            continue
        power = f"{poly.ring.variable}^{k}"
        approx = format_number(c.get(float), ".6e")
        lines.append(f"  {Fore.CYAN}{power:>6}{Style.RESET_ALL}  {c.to_string():>24}   {Style.DIM}≈ {approx}{Style.RESET_ALL}")
    return lines


def evaluation_line(x: Any, got: Any, expected: Any | None) -> str:
    line = f"  f({format_number(x)}) = {Fore.GREEN}{format_number(got)}{Style.RESET_ALL}"
    if expected is not None:
        err = abs(float(got) - float(expected))
        colour = Fore.GREEN if err < 1e-9 else Fore.YELLOW
        line += f"   reference {format_number(expected)}   {colour}|Δ| = {err:.3e}{Style.RESET_ALL}"
    return line


def status(ok: bool, label: str, detail: str = "") -> str:
    stat = f"{Fore.GREEN}{Style.BRIGHT}OK  {Style.RESET_ALL}" if ok else f"{Fore.RED}{Style.BRIGHT}FAIL{Style.RESET_ALL}"
    line = f"{stat} {label}"
    if detail:
        line += f" — {Style.DIM}{detail}{Style.RESET_ALL}"
    return line


def print_series_list(index: Any) -> None:
    print(f"{Fore.YELLOW}Available series: {len(index.builders)}{Style.RESET_ALL}")
    print()
    reverse_aliases: dict[str, list[str]] = {}
    for alias, label in index.aliases.items():
        reverse_aliases.setdefault(label, []).append(alias)
    for label in sorted(index.builders):
        fn = index.builders[label]
        tags = []
        if index.kinds.get(label) == "derived":
            tags.append("derived")
        parity = getattr(fn, "parity", None)
        if parity:
            tags.append(parity)
        if label in reverse_aliases:
            tags.append("alias " + ", ".join(sorted(reverse_aliases[label])))
        if index.sources.get(label, "").startswith("ws:"):
            tags.append("workspace")
        suffix = f" {Style.DIM}({'; '.join(tags)}){Style.RESET_ALL}" if tags else ""
        desc = index.descriptions.get(label, "")
        left = f"  {Fore.GREEN}{label}{Style.RESET_ALL}{suffix}"
        print(f"{left} — {desc}" if desc else left)


def print_profiles_with_descriptions(pairs: list[tuple[str, str]], current: str | None = None) -> None:
    if not pairs:
        print("\nAvailable profiles: (none)")
        return
    lines = []
    for name, desc in pairs:
        mark = "*" if current and name == current else " "
        lines.append(f"{mark} {name:13} — {desc}")
    print("\nAvailable profiles:\n  " + "\n  ".join(lines))
