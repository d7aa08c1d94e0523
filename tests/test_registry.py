# tests/test_registry.py
from __future__ import annotations

import textwrap

import pytest

from ringalg import runtime
from ringalg.fraction import q64
from ringalg.integers import i64
from ringalg.registry import coefficients, derived, discover, discover_with_report
from ringalg.workspace import seed_workspace

OVERRIDE = textwrap.dedent("""\
    import sympy as sp

    from ringalg.fraction import fraction_field
    from ringalg.registry import coefficients


    @coefficients(label="exp", description="all ones", reference=sp.exp)
    def flat_exp(T, i):
        return fraction_field(T).one


    @coefficients(label="log1p", description="takes the alias name")
    def log1p(T, i):
        return fraction_field(T).zero
""")


def _write_series(ws, name, text):
    d = ws / "series"
    d.mkdir(parents=True, exist_ok=True)
    (d / name).write_text(text, encoding="utf-8")


def test_decorators_tag_functions():
    @coefficients(label="demo", description="d", parity="even", aliases=("DM",))
    def demo(T, i):
        return T.one

    assert demo.__is_series__ and demo.kind == "coefficients"
    assert demo.parity == "even" and demo.aliases == ("DM",)

    @derived(label="twice")
    def twice(T, degree):
        return None

    assert twice.kind == "derived" and twice.parity is None


def test_invalid_parity():
    with pytest.raises(ValueError):
        coefficients(label="bad", parity="both")


def test_packaged_discovery():
    idx, rep = discover_with_report(None)
    assert not rep.pkg_failed
    assert {"exp", "sin", "atanh", "tan"} <= set(idx.labels())
    assert idx.sources["exp"] == "pkg:ringalg.series.elementary"
    assert idx.kinds["expm1"] == "derived"
    assert "ARCTAN" in idx and "nope" not in idx


def test_workspace_overrides_packaged(workspace):
    _write_series(workspace, "override.py", OVERRIDE)
    idx, rep = discover_with_report(workspace)
    assert rep.ws_loaded == [("override.py", 2)]
    assert idx.sources["exp"] == "ws:override.py"
    assert ("exp", "pkg:ringalg.series.elementary", "ws:override.py") in rep.skipped_duplicates
    p = idx.build("exp", i64, 3)
    assert all(c == q64.one for c in p.coeffs)


def test_alias_never_shadows_a_label(workspace):
    _write_series(workspace, "override.py", OVERRIDE)
    idx = discover(workspace)
    assert idx.resolve("log1p") == "log1p"
    assert idx.resolve("lnp1") == "lnp1"


def test_broken_workspace_file_is_reported(workspace):
    _write_series(workspace, "broken.py", "raise RuntimeError('boom')\n")
    idx, rep = discover_with_report(workspace)
    assert rep.ws_failed == [("broken.py", "RuntimeError: boom")]
    assert "exp" in idx


def test_imported_series_are_not_collected_twice(workspace):
    seed_workspace()
    idx, rep = discover_with_report(workspace)
    # the sample imports `cos` but only defines `cosm1`
    assert rep.ws_loaded == [("cosm1.py", 1)]
    assert idx.sources["cos"].startswith("pkg:")
    p = idx.build("cosm1", i64, 4)
    assert p.coeff_at(0).is_zero()
    assert p.coeff_at(2) == q64.make(-1, 2)


def test_derived_negative_degree():
    idx = discover(None)
    with pytest.raises(ValueError):
        idx.build("expm1", i64, -1)


def test_build_prints_timing_in_debug(capsys):
    idx = discover(None)
    runtime.current().debug = True
    idx.build("sin", i64, 3)
    err = capsys.readouterr().err
    assert "[debug] built sin" in err


def test_build_is_quiet_by_default(capsys):
    discover(None).build("sin", i64, 3)
    assert capsys.readouterr().err == ""
