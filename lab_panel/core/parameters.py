"""In-memory store of the panel's bounded numeric inputs."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, Iterable

from lab_panel.config import ParameterSpec
from lab_panel.core.contracts import Parameter

logger = logging.getLogger(__name__)


def clamp(x: float, lower: float, upper: float) -> float:
    return max(min(x, upper), lower)


def coerce_number(raw: Any) -> float | None:
    """Return ``raw`` as a finite number, or None when it is not one.

    Ints and floats pass through untouched so an in-range edit is stored exactly.
    Numeric strings (browser number inputs) are parsed.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = raw
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(value):
        return None
    return value


class ParameterStore:
    def __init__(self, specs: Iterable[ParameterSpec]) -> None:
        self._specs: dict[str, ParameterSpec] = {}
        self._params: dict[str, Parameter] = {}
        for spec in specs:
            if spec.id in self._specs:
                raise ValueError(f"duplicate parameter id: {spec.id!r}")
            if not spec.min <= spec.max:
                raise ValueError(f"parameter {spec.id!r}: min {spec.min} > max {spec.max}")
            if not spec.min <= spec.default <= spec.max:
                raise ValueError(
                    f"parameter {spec.id!r}: default {spec.default} outside [{spec.min}, {spec.max}]"
                )
            self._specs[spec.id] = spec
            self._params[spec.id] = _from_spec(spec)

    @classmethod
    def from_config(cls, specs: Iterable[ParameterSpec]) -> "ParameterStore":
        return cls(specs)

    def set_value(self, param_id: str, raw_value: Any) -> None:
        """Clamp ``raw_value`` into the parameter's bounds and store it.

        Unknown ids and non-numeric input are ignored.
        """
        param = self._params.get(param_id)
        if param is None:
            logger.debug("Ignoring edit for unknown parameter %r", param_id)
            return
        value = coerce_number(raw_value)
        if value is None:
            logger.debug("Ignoring non-numeric value %r for %r", raw_value, param_id)
            return
        self._params[param_id] = replace(param, value=clamp(value, param.min, param.max))

    def get_value(self, param_id: str) -> float:
        return self._params[param_id].value

    def get(self, param_id: str) -> Parameter:
        return self._params[param_id]

    def get_all(self) -> list[Parameter]:
        return list(self._params.values())

    def values(self) -> dict[str, float]:
        return {pid: p.value for pid, p in self._params.items()}

    def snapshot(self) -> tuple[Parameter, ...]:
        return tuple(self._params.values())

    def reset(self) -> None:
        for pid, spec in self._specs.items():
            self._params[pid] = _from_spec(spec)


def _from_spec(spec: ParameterSpec) -> Parameter:
    return Parameter(
        id=spec.id,
        label=spec.label,
        min=spec.min,
        max=spec.max,
        step=spec.step,
        value=spec.default,
    )
