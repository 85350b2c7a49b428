"""Formatted ASCII table display for collinearity results.

Predictors are grouped by interpretation band — low (VIF < 5),
moderate (5 ≤ VIF < 10) and high (VIF ≥ 10) correlation — so that the
terms needing attention stand out.  Two-part models checked with
``component="all"`` get one block per component.  Non-fatal notes
(missing intercept, too few terms) are printed at the bottom.
"""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

from ._results import VIF_HIGH, VIF_MODERATE, CollinearityRow

if TYPE_CHECKING:
    from ._results import CollinearityResult

_BANDS: list[tuple[str, str]] = [
    ("low", f"Low Correlation (VIF < {VIF_MODERATE:g})"),
    ("moderate", f"Moderate Correlation ({VIF_MODERATE:g} <= VIF < {VIF_HIGH:g})"),
    ("high", f"High Correlation (VIF >= {VIF_HIGH:g})"),
]


def _truncate(name: str, max_len: int) -> str:
    """Truncate *name* to *max_len*, appending ``'...'`` if needed."""
    if len(name) <= max_len:
        return name
    return name[: max_len - 3] + "..."


def _fmt_vif(value: float, width: int) -> str:
    """Format a VIF (or SE factor) right-aligned; huge and non-finite values collapse."""
    if value != value:  # nan check
        return f"{'N/A':>{width}}"
    if value >= 1000:
        return f"{'> 1000':>{width}}"
    return f"{value:>{width}.2f}"


def _wrap(text: str, width: int = 80, indent: int = 2) -> str:
    return textwrap.fill(
        text,
        width=width,
        initial_indent="",
        subsequent_indent=" " * indent,
    )


def _print_rows(rows: list[CollinearityRow], fc: int) -> None:
    for band, heading in _BANDS:
        banded = [row for row in rows if row.correlation == band]
        if not banded:
            continue
        print(heading)
        print(f"  {'Predictor':<{fc}}{'VIF':>12}{'Increased SE':>16}")
        for row in banded:
            name = _truncate(row.predictor, fc)
            print(
                f"  {name:<{fc}}"
                f"{_fmt_vif(row.vif, 12)}"
                f"{_fmt_vif(row.se_factor, 16)}"
            )
        print()


def print_collinearity_table(
    result: CollinearityResult,
    *,
    title: str = "Check for Multicollinearity",
) -> None:
    """Print a collinearity result as a formatted ASCII table.

    Args:
        result: Result returned by
            :func:`~collinearity_diagnostics.check_collinearity`.
        title: Title for the output table.
    """
    W = 80
    fc = 40  # predictor name column width

    print("=" * W)
    for line in textwrap.wrap(title, width=W - 2):
        print(f"{line:^{W}}")
    print("=" * W)

    if result.is_empty:
        print("  No VIFs available.")
    else:
        components: list[str | None] = []
        for row in result.rows:
            if row.component not in components:
                components.append(row.component)
        for comp in components:
            if comp is not None:
                print(f"Component: {comp}")
                print("-" * W)
            _print_rows([row for row in result.rows if row.component == comp], fc)

    if result.notes:
        print("-" * W)
        print("Notes")
        print("-" * W)
        for note in result.notes:
            prefix = f"({note.component}) " if note.component else ""
            print(_wrap(f"  [!] {prefix}{note.message}", width=W, indent=6))

    print("=" * W)
    print()
