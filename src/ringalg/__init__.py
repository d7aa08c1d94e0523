from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("ringalg")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .algebra import CapabilityError, EuclideanDomain, Field, InexactDivisionError, Ring
from .combinatorics import alternate, bernoulli, binomial, factorial, power
from .continued_fraction import continued_fraction
from .fraction import fpq32, fpq64, fraction_field, make_fraction, q32, q64
from .integers import i32, i64, is_prime, zpz
from .polynomial import polynomial
from .registry import build_series, discover
from .runtime import APPLY, CFG
from .taylor import taylor

__all__ = [
    "APPLY",
    "CFG",
    "CapabilityError",
    "EuclideanDomain",
    "Field",
    "InexactDivisionError",
    "Ring",
    "__version__",
    "alternate",
    "bernoulli",
    "binomial",
    "build_series",
    "continued_fraction",
    "discover",
    "factorial",
    "fpq32",
    "fpq64",
    "fraction_field",
    "i32",
    "i64",
    "is_prime",
    "make_fraction",
    "polynomial",
    "power",
    "q32",
    "q64",
    "taylor",
    "zpz",
]
