# lab_panel/config.py

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return float(raw)


# ---------------------------
# Structured configuration
# ---------------------------

@dataclass(frozen=True)
class ParameterSpec:
    """Static description of one tunable input (bounds, step hint, default)."""

    id: str
    label: str
    min: float
    max: float
    step: float
    default: float


DEFAULT_PARAMETERS: Tuple[ParameterSpec, ...] = (
    ParameterSpec("step-size", "Step-size (µ)", 0.001, 0.1, 0.001, 0.01),
    ParameterSpec("num-samples", "Number of Samples (N)", 10, 1000, 10, 500),
    ParameterSpec("signal-power", "Signal Power", 0.005, 0.05, 0.001, 0.01),
    ParameterSpec("noise-power", "Noise Power", 0.001, 0.01, 0.001, 0.001),
)


@dataclass(frozen=True)
class ServiceConfig:
    """Remote execution service address.

    Values can be overridden via environment variables:
    - LAB_PANEL_SERVICE_URL
    - LAB_PANEL_RUN_PATH
    - LAB_PANEL_TIMEOUT_S (unset means no timeout)
    """

    base_url: str = field(
        default_factory=lambda: os.getenv("LAB_PANEL_SERVICE_URL", "http://localhost:5000")
    )
    run_path: str = field(default_factory=lambda: os.getenv("LAB_PANEL_RUN_PATH", "/lms_equ"))
    timeout_s: Optional[float] = field(default_factory=lambda: _env_float("LAB_PANEL_TIMEOUT_S"))

    @property
    def run_url(self) -> str:
        return self.base_url.rstrip("/") + "/" + self.run_path.lstrip("/")


@dataclass(frozen=True)
class ScriptConfig:
    """Script preview and download settings."""

    download_name: str = field(
        default_factory=lambda: os.getenv("LAB_PANEL_DOWNLOAD_NAME", "rls_denoise.m")
    )
    placeholder_text: str = "Code will be generated here."


@dataclass(frozen=True)
class PanelConfig:
    """Everything one panel instance needs at construction."""

    parameters: Tuple[ParameterSpec, ...] = DEFAULT_PARAMETERS
    service: ServiceConfig = field(default_factory=ServiceConfig)
    script: ScriptConfig = field(default_factory=ScriptConfig)
    # Shown (hidden) until the first successful run replaces it.
    placeholder_artifacts: Tuple[str, ...] = ("assets/placeholder.png",)
    log_level: str = field(default_factory=lambda: os.getenv("LAB_PANEL_LOG_LEVEL", "INFO"))


def load_config() -> PanelConfig:
    """Return a fresh configuration, re-reading environment overrides."""
    return PanelConfig()
