"""Warning-mode configuration for the collinearity_diagnostics package.

Controls how non-fatal collinearity notes (model without intercept,
too few terms to compare) are surfaced.  The notes are always attached
to the returned :class:`~collinearity_diagnostics.CollinearityResult`;
the mode only decides whether they are *also* reported as a side
channel.

Resolution order (first match wins):
    1. Programmatic override via :func:`set_warning_mode`.
    2. The ``COLLINEARITY_DIAGNOSTICS_WARNINGS`` environment variable.
    3. The default, ``"log"``.

Valid mode names are ``"log"``, ``"warn"`` and ``"silent"``
(case-insensitive):

* ``"log"`` — a ``WARNING`` record on the package logger.
* ``"warn"`` — a Python :class:`UserWarning` via :func:`warnings.warn`.
* ``"silent"`` — nothing beyond the note on the result object.

Examples:
    Turn notes into Python warnings from the shell::

        export COLLINEARITY_DIAGNOSTICS_WARNINGS=warn

    Silence them programmatically::

        import collinearity_diagnostics
        collinearity_diagnostics.set_warning_mode("silent")

    Re-enable the default resolution::

        collinearity_diagnostics.set_warning_mode("auto")
"""

from __future__ import annotations

import os

_VALID_MODES = {"log", "warn", "silent", "auto"}

_DEFAULT_MODE = "log"

# Sentinel indicating "no programmatic override has been set".
_mode_override: str | None = None


def get_warning_mode() -> str:
    """Return the active warning mode (``"log"``, ``"warn"`` or ``"silent"``).

    Resolution order:
        1. Value set by :func:`set_warning_mode` (unless ``"auto"``).
        2. ``COLLINEARITY_DIAGNOSTICS_WARNINGS`` environment variable.
        3. ``"log"``.

    Returns:
        ``"log"``, ``"warn"`` or ``"silent"``.
    """
    # 1. Programmatic override
    if _mode_override is not None and _mode_override != "auto":
        return _mode_override

    # 2. Environment variable
    env = os.environ.get("COLLINEARITY_DIAGNOSTICS_WARNINGS", "").strip().lower()
    if env in ("log", "warn", "silent"):
        return env

    # 3. Default
    return _DEFAULT_MODE


def set_warning_mode(name: str) -> None:
    """Override the warning-mode selection.

    Args:
        name: One of ``"log"``, ``"warn"``, ``"silent"`` or ``"auto"``
            (case-insensitive).  ``"auto"`` restores the default
            resolution order.

    Raises:
        ValueError: If *name* is not a recognised mode.
    """
    global _mode_override
    normalised = name.strip().lower()
    if normalised not in _VALID_MODES:
        raise ValueError(
            f"Unknown warning mode '{name}'. Choose from: {sorted(_VALID_MODES)}"
        )
    _mode_override = normalised
