"""Octave script generation for the LMS channel-equalization experiment.

The function body is fixed. Only the driver section at the end changes: it
assigns the four panel values and calls ``lms_equal``.
"""

from __future__ import annotations

import html
from decimal import Decimal
from typing import Mapping

from lab_panel.core.contracts import Script, ScriptDownload

SCRIPT_EXTENSION = ".m"

LMS_FUNCTION_BODY = """\
function lms_equal(N, signal_power, noise_power, mu)
    % N: Number of samples
    % signal_power: Power of the signal
    % noise_power: Power of the noise
    % mu: Step size for LMS algorithm

    h = [2 1];  % Impulse response of channel
    x = sqrt(signal_power) .* randn(1, N);  % Input signal
    d = conv(x, h);
    d = d(1:N) + sqrt(noise_power) .* randn(1, N);  % Introduction of noise

    w0(1) = 0;  % Initial filter weights
    w1(1) = 0;

    y(1) = w0(1) * x(1);  % Filter output
    e(1) = d(1) - y(1);  % Error signal
    w0(2) = w0(1) + 2 * mu * e(1) * x(1);  % Update weights
    w1(2) = w1(1);  % Update weights

    for n = 2:N  % LMS algorithm
        y(n) = w0(n) * x(n) + w1(n) * x(n-1);  % Filter output
        e(n) = d(n) - y(n);  % Error signal
        w0(n+1) = w0(n) + mu * e(n) * x(n);  % Update weight
        w1(n+1) = w1(n) + mu * e(n) * x(n-1);  % Update weight
    endfor

    mse = zeros(1, N);
    for i = 1:N
        mse(i) = abs(e(i)).^2;
    endfor

    n = 1:N;
    semilogy(n, mse);  % MSE versus time
    xlabel('Adaptation cycles');
    ylabel('MSE');
    title('Adaptation cycles vs. MSE');
endfunction
"""

DRIVER_TEMPLATE = """\
N = {N};  % Number of samples
signal_power = {signal_power};  % Signal power
noise_power = {noise_power};  % Noise power
mu = {mu};  % Step size for LMS algorithm

lms_equal(N, signal_power, noise_power, mu);
"""

# Panel parameter id -> driver variable.
DRIVER_BINDINGS = {
    "num-samples": "N",
    "signal-power": "signal_power",
    "noise-power": "noise_power",
    "step-size": "mu",
}


def format_number(x: float) -> str:
    """Render ``x`` in plain decimal form (``500`` not ``500.0``)."""
    if float(x).is_integer():
        return str(int(x))
    return format(Decimal(repr(float(x))), "f")


def render_display(code: str) -> str:
    return f"<pre>{html.escape(code)}</pre>"


def build_code(values: Mapping[str, float]) -> str:
    driver = DRIVER_TEMPLATE.format(
        **{var: format_number(values[pid]) for pid, var in DRIVER_BINDINGS.items()}
    )
    return LMS_FUNCTION_BODY + driver


def generate(values: Mapping[str, float]) -> Script:
    """Build the script for the given ``{parameter_id: value}`` mapping.

    Raises KeyError if one of the four driver parameters is missing.
    """
    code = build_code(values)
    return Script(code=code, display=render_display(code))


def normalize_filename(filename: str) -> str:
    if filename.endswith(SCRIPT_EXTENSION):
        return filename
    return filename + SCRIPT_EXTENSION


def download(script: Script, filename: str) -> ScriptDownload:
    return ScriptDownload(file_name=normalize_filename(filename), data=script.code.encode("utf-8"))

