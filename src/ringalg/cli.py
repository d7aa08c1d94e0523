# src/ringalg/cli.py

"""
ringalg - exact Taylor series, Bernoulli numbers and continued fractions

Description:
    Builds Taylor polynomials with exact rational coefficients over
    fixed-width or modular integers, prints them, evaluates them and
    compares them with sympy and the host math library.

usage: ringalg -h
"""

from __future__ import annotations

import argparse
import faulthandler
import math
import os
import sys
import textwrap
import traceback
from contextlib import nullcontext
from fractions import Fraction
from importlib.resources import files as pkg_files
from typing import Any

import sympy as sp
from colorama import Fore, Style
from colorama import init as colorama_init

from ringalg import __version__ as _ver
from ringalg import config as CONFIG
from ringalg.combinatorics import bernoulli
from ringalg.continued_fraction import CONSTANTS
from ringalg.fmt import (
    abbreviate,
    coefficient_lines,
    debug,
    evaluation_line,
    format_number,
    print_profiles_with_descriptions,
    print_series_list,
    status,
)
from ringalg.integers import IntegerRing
from ringalg.known_polynomials import KNOWN
from ringalg.polynomial import with_variable
from ringalg.registry import discover, discover_with_report
from ringalg.runtime import APPLY, CFG, ensure_runtime_deps
from ringalg.runtime import current as _rt_current
from ringalg.symbolic import series_matches
from ringalg.utility import (
    UserInputError,
    flatten_dotted,
    high_precision,
    parse_number,
    series_base,
    to_high_precision,
    typename,
)
from ringalg.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

_CONSTANT_VALUES = {
    "pi": math.pi,
    "e": math.e,
    "sqrt2": math.sqrt(2),
    "sqrt3": math.sqrt(3),
}

_SYMPY_POLYNOMIALS = {
    "chebyshev": sp.chebyshevt,
    "hermite": sp.hermite,
}


def _install_loud_error_handlers(debug_on: bool) -> None:
    if not debug_on:
        return
    try:
        faulthandler.enable()
    except (OSError, ValueError):
        # stderr has no file descriptor (captured or redirected)
        pass

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not msg.startswith("Error:"):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:
    epilog = textwrap.dedent("""\
    rings:
      i32, i64          fixed-width integers (series live in their fraction field)
      q32, q64          the same, named by their fraction field
      zpz:P             integers modulo P

    examples:
      ringalg series exp --degree 10 --at 0.1 0.5
      ringalg series tan --check
      ringalg bernoulli 12
      ringalg constant pi
      ringalg poly hermite 5 --at 1/2
    """)

    p = argparse.ArgumentParser(
        prog="ringalg",
        description="Exact-arithmetic Taylor series, Bernoulli numbers and continued fractions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    p.add_argument("--profile", default=None, help="Settings profile (default: last used, else 'default')")
    p.add_argument("--debug", action="store_true", help="Show discovery, timings and tracebacks")

    sub = p.add_subparsers(dest="command", metavar="command")
    sub.required = True

    s = sub.add_parser("series", help="Build, print and evaluate a named Taylor series")
    s.add_argument("name", help="Series label or alias (see 'ringalg list')")
    s.add_argument("--degree", type=int, default=None, help="Truncation degree (profile SERIES.DEGREE)")
    s.add_argument("--ring", default=None, help="Base ring (profile SERIES.RING)")
    s.add_argument("--at", nargs="+", default=[], metavar="X", help="Evaluate at these points (3, 1/3, 0.1)")
    s.add_argument("--digits", type=int, default=None, help="Evaluate with gmpy2 at this many digits")
    s.add_argument("--check", action="store_true", help="Compare coefficients with sympy's series expansion")
    s.add_argument("--no-coefficients", action="store_true", help="Omit the coefficient table")

    sub.add_parser("list", help="List the registered series")

    b = sub.add_parser("bernoulli", help="Print the Bernoulli numbers B_0 .. B_M")
    b.add_argument("m", type=int)
    b.add_argument("--ring", default=None, help="Base ring (profile SERIES.RING)")

    c = sub.add_parser("constant", help="Continued-fraction approximant of a constant")
    c.add_argument("name", choices=sorted(CONSTANTS))

    k = sub.add_parser("poly", help="Chebyshev or Hermite polynomial")
    k.add_argument("family", choices=sorted(KNOWN))
    k.add_argument("n", type=int)
    k.add_argument("--at", nargs="+", default=[], metavar="X")
    k.add_argument("--ring", default=None, help="Base ring (profile SERIES.RING)")

    sub.add_parser("profiles", help="List the available profiles")
    sub.add_parser("where", help="Show the workspace and package paths")

    i = sub.add_parser("init", help="Create the workspace and copy packaged profiles and sample series")
    i.add_argument("--overwrite", action="store_true", help="Developers only; requires RINGALG_DEV=1")

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug_on = "--debug" in (argv if argv is not None else sys.argv)
        if debug_on:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


# ---- profile handling ----

def _select_profile_name(explicit: str | None) -> str:
    """explicit --profile, then the last used one, then 'default'."""
    if explicit:
        return explicit
    last = CONFIG.read_current_profile()
    if last and CONFIG.has_profile(last):
        return last
    return "default"


def _apply_profile(explicit: str | None) -> None:
    name = _select_profile_name(explicit)
    if explicit and not CONFIG.has_profile(explicit):
        known = ", ".join(CONFIG.list_all_profiles()) or "(none)"
        raise UserInputError(f"unknown profile '{explicit}' (available: {known})")
    selected = CONFIG.load_settings(name)
    if explicit:
        CONFIG.write_current_profile(selected._source.stem if selected._source else name)
    debug_flag = _rt_current().debug
    APPLY(selected)
    # --debug on the command line wins over the profile
    _rt_current().debug = debug_flag or _rt_current().debug

    if _rt_current().debug:
        debug(f"active profile: {selected.name}")
        if selected._source:
            debug(f"profile file: {selected._source}")
        flat = flatten_dotted(selected.as_dict())
        for key in sorted(flat, key=str.lower):
            val = flat[key]
            print(f"        {key:.<40} {val!r} ({typename(val)})", file=sys.stderr)


def _discover():
    if not _rt_current().debug:
        return discover(workspace_dir())
    index, rep = discover_with_report(workspace_dir())
    debug(f"discovered series: {len(index.builders)}")
    for name, cnt in rep.ws_loaded:
        print(f"[discovery] {Fore.GREEN}ws OK{Style.RESET_ALL} {name}: {cnt} label(s)", file=sys.stderr)
    for name, err in rep.ws_failed:
        print(f"[discovery] {Fore.RED}ws FAIL{Style.RESET_ALL} {name}: {err}", file=sys.stderr)
    for name, cnt in rep.pkg_loaded:
        print(f"[discovery] {Fore.GREEN}pkg OK{Style.RESET_ALL} {name}: {cnt} label(s)", file=sys.stderr)
    for name, err in rep.pkg_failed:
        print(f"[discovery] {Fore.RED}pkg FAIL{Style.RESET_ALL} {name}: {err}", file=sys.stderr)
    if rep.skipped_duplicates:
        print(f"[discovery] {Fore.YELLOW}SKIP{Style.RESET_ALL} {len(rep.skipped_duplicates)} duplicate label(s) skipped.",
              file=sys.stderr)
    return index


def _ring_from(arg: str | None) -> Any:
    return series_base(arg if arg is not None else CFG("SERIES.RING", "i64"))


def _points(values: list[str], digits: int) -> list[Any]:
    """Decimals are read straight into mpfr when digits is set, exact points are widened."""
    pts = [parse_number(v, digits=digits or None) for v in values]
    if digits:
        pts = [to_high_precision(x, digits) if isinstance(x, (int, Fraction)) else x for x in pts]
    return pts


def _sympy_point(x: Any) -> Any:
    if isinstance(x, Fraction):
        return sp.Rational(x.numerator, x.denominator)
    if isinstance(x, int):
        return sp.Integer(x)
    return sp.Float(str(x), 50)


# ---- commands ----

def _cmd_series(args) -> int:
    index = _discover()
    try:
        label = index.resolve(args.name)
    except ValueError as e:
        raise UserInputError(str(e)) from None
    fn = index.builders[label]
    T = _ring_from(args.ring)
    degree = args.degree if args.degree is not None else int(CFG("SERIES.DEGREE", 8))
    if degree < 0:
        raise UserInputError(f"degree must be non-negative, got {degree}")
    digits = args.digits if args.digits is not None else int(CFG("DISPLAY.DIGITS", 0))

    try:
        poly = index.build(label, T, degree)
    except ArithmeticError as e:
        raise UserInputError(f"cannot build {label} of degree {degree} over {T}: {e}") from None
    poly = with_variable(poly, str(CFG("SERIES.VARIABLE", "x")))

    print(f"{Fore.YELLOW}{Style.BRIGHT}{label}{Style.RESET_ALL} — {index.descriptions.get(label, '')}")
    print(f"{Style.DIM}degree {degree} over {poly.ring.base}{Style.RESET_ALL}")
    print()
    print("  " + abbreviate(poly.to_string()))

    show = CFG("DISPLAY.SHOW_COEFFICIENTS", True) and not args.no_coefficients
    if show:
        print()
        for line in coefficient_lines(poly):
            print(line)

    points = _points(args.at, digits)
    if points:
        print()
        reference = getattr(fn, "reference", None)
        with high_precision(digits) if digits else nullcontext():
            for x in points:
                got = poly.eval(x)
                expected = None
                if reference is not None:
                    expected = sp.N(reference(_sympy_point(x)), max(digits, 17))
                print(evaluation_line(x, got, expected))

    if args.check:
        print()
        reference = getattr(fn, "reference", None)
        if reference is None:
            print(status(False, "sympy check", "series has no reference function"))
            return 1
        if not isinstance(T, IntegerRing):
            print(f"{Fore.YELLOW}SKIP{Style.RESET_ALL} sympy check — only meaningful over i32/i64")
            return 0
        ok = series_matches(poly, reference)
        print(status(ok, "sympy check", f"{label} up to x^{degree}"))
        return 0 if ok else 1
    return 0


def _cmd_bernoulli(args) -> int:
    if args.m < 0:
        raise UserInputError(f"M must be non-negative, got {args.m}")
    T = _ring_from(args.ring)
    for m in range(args.m + 1):
        b = bernoulli(T, m)
        approx = format_number(b.get(float), ".10g") if isinstance(T, IntegerRing) else ""
        print(f"  B_{m:<3} = {b.to_string():>24}   {Style.DIM}{approx}{Style.RESET_ALL}")
    return 0


def _cmd_constant(args) -> int:
    terms, value = CONSTANTS[args.name]
    approx = value.get(float)
    ref = _CONSTANT_VALUES[args.name]
    inner = ", ".join(str(t) for t in terms[1:])
    print(f"{Fore.YELLOW}{args.name}{Style.RESET_ALL} = [{terms[0]}; {inner}]")
    print(f"  exact  {value.to_string()}")
    print(f"  float  {format_number(approx)}")
    print(f"  math   {format_number(ref)}   {Style.DIM}|Δ| = {abs(approx - ref):.3e}{Style.RESET_ALL}")
    return 0


def _cmd_poly(args) -> int:
    if args.n < 0:
        raise UserInputError(f"N must be non-negative, got {args.n}")
    T = _ring_from(args.ring)
    poly = with_variable(KNOWN[args.family](args.n, T), str(CFG("SERIES.VARIABLE", "x")))
    print(f"{Fore.YELLOW}{args.family}{Style.RESET_ALL} n={args.n}")
    print("  " + abbreviate(poly.to_string()))
    points = _points(args.at, 0)
    if points:
        print()
        ref_fn = _SYMPY_POLYNOMIALS[args.family]
        for x in points:
            expected = ref_fn(args.n, _sympy_point(x))
            print(evaluation_line(x, poly.eval(x), expected))
    return 0


def _cmd_init(args) -> int:
    if args.overwrite:
        if os.environ.get("RINGALG_DEV") != "1":
            print("Refusing to overwrite: set RINGALG_DEV=1 to enable developer overwrite.")
            return 2
        ws, copied = seed_workspace(overwrite=True)
        print(f"Workspace ready at: {ws} (overwrote existing files)")
    else:
        ws, _, copied = ensure_workspace_seeded()
        print(f"Workspace ready at: {ws}")
    print(f"Copied -> profiles: {copied.get('profiles', 0)}, series: {copied.get('series', 0)}")
    return 0


# ---- main ----
def _main_impl(argv=None) -> int:
    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    _install_loud_error_handlers(args.debug)

    if not ensure_runtime_deps(strict=True):
        return 1

    if args.command == "init":
        return _cmd_init(args)

    ensure_workspace_seeded()
    _apply_profile(args.profile)

    if args.command == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Package:   {pkg_files('ringalg')}")
        return 0
    if args.command == "profiles":
        print_profiles_with_descriptions(CONFIG.list_profiles_with_descriptions(),
                                         current=_rt_current().profile_name)
        return 0
    if args.command == "list":
        print_series_list(_discover())
        return 0
    if args.command == "series":
        return _cmd_series(args)
    if args.command == "bernoulli":
        return _cmd_bernoulli(args)
    if args.command == "constant":
        return _cmd_constant(args)
    if args.command == "poly":
        return _cmd_poly(args)

    parser.error(f"unknown command {args.command!r}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
