"""Formatting helpers for the parameter panel."""

from __future__ import annotations

from decimal import Decimal

import pandas as pd

from lab_panel.core.contracts import Parameter
from lab_panel.core.script_synth import format_number


def bounds_label(param: Parameter) -> str:
    """Return ``"min ≤ label ≤ max"`` for the input caption."""
    return f"{format_number(param.min)} ≤ {param.label} ≤ {format_number(param.max)}"


def decimal_places(x: float) -> int:
    if float(x).is_integer():
        return 0
    return max(0, -Decimal(repr(float(x))).as_tuple().exponent)


def widget_format(param: Parameter) -> str:
    """Return the printf format for the number input and slider.

    Shows as many decimals as the step or the stored value needs, so
    ``0.001`` reads back as ``0.001`` and the sample count as ``500``.
    """
    places = max(decimal_places(param.step), decimal_places(param.value))
    return f"%.{places}f"


def parameters_frame(params: list[Parameter]) -> pd.DataFrame:
    """Return the current parameters as a table (one row per parameter, in order)."""
    return pd.DataFrame(
        [
            {
                "Parameter": p.label,
                "Min": p.min,
                "Value": p.value,
                "Max": p.max,
                "Step": p.step,
            }
            for p in params
        ],
        columns=["Parameter", "Min", "Value", "Max", "Step"],
    )


def artifact_caption(index: int) -> str:
    return f"Output {index + 1}"
