from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class RunStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Parameter:
    id: str
    label: str
    min: float
    max: float
    step: float
    value: float


@dataclass(frozen=True)
class Script:
    """Generated Octave text plus its HTML preview."""

    code: str
    display: str


@dataclass(frozen=True)
class ScriptDownload:
    file_name: str
    data: bytes
    mime: str = "text/plain"


@dataclass(frozen=True)
class ExecutionRequest:
    N: int | float
    signal_power: float
    noise_power: float
    mu: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ExecutionResult:
    artifact_urls: tuple[str, ...]
