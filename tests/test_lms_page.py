"""Tests for the LMS Streamlit page, driven through a fake ``st``."""

from __future__ import annotations

import asyncio

from lab_panel.config import PanelConfig, ServiceConfig
from lab_panel.core.contracts import RunStatus
from lab_panel.core.panel import LmsPanel
from lab_panel.ui.page_modules import lms_page


class _Ctx:
    def __enter__(self):
        return self

    def __exit__(self, *exc):  # noqa: ANN002
        return False


class _FakeSt:
    def __init__(self, clicked=()) -> None:
        self.session_state: dict = {}
        self.clicked = set(clicked)
        self.calls: list[tuple[str, tuple, dict]] = []
        self.reran = False

    def _record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))

    def named(self, name: str) -> list[tuple[tuple, dict]]:
        return [(a, k) for n, a, k in self.calls if n == name]

    def __getattr__(self, name):
        if name in {
            "subheader",
            "markdown",
            "caption",
            "info",
            "warning",
            "image",
            "dataframe",
            "number_input",
            "slider",
            "download_button",
        }:
            return lambda *a, **k: self._record(name, *a, **k)
        raise AttributeError(name)

    def columns(self, spec):
        n = spec if isinstance(spec, int) else len(spec)
        return [_Ctx() for _ in range(n)]

    def expander(self, label):
        return _Ctx()

    def spinner(self, text):
        self._record("spinner", text)
        return _Ctx()

    def button(self, label, key=None, **kwargs):
        self._record("button", label, key=key)
        return label in self.clicked

    def rerun(self) -> None:
        self.reran = True


def _panel() -> LmsPanel:
    return LmsPanel(
        PanelConfig(service=ServiceConfig(base_url="http://localhost:5000", run_path="/lms_equ", timeout_s=None))
    )


def _render(st, panel, *, reset_panel=None):
    html_calls: list[str] = []

    def _html(body, **kwargs):
        html_calls.append(body)

    lms_page.render_lms_page(
        st=st,
        components_html=_html,
        run_async=asyncio.run,
        panel=panel,
        reset_panel=reset_panel or (lambda: None),
    )
    return html_calls


def test_first_render_seeds_widgets_and_shows_placeholder() -> None:
    st = _FakeSt()
    panel = _panel()

    html_calls = _render(st, panel)

    assert html_calls == ["<pre>Code will be generated here.</pre>"]
    assert st.session_state["lms_num_num-samples"] == 500.0
    assert st.session_state["lms_slider_step-size"] == 0.01
    assert len(st.named("number_input")) == 4
    assert len(st.named("slider")) == 4
    assert st.named("image") == []

    (_, dl_kwargs), = st.named("download_button")
    assert dl_kwargs["disabled"] is True


def test_bounds_captions_are_rendered() -> None:
    st = _FakeSt()
    _render(st, _panel())

    captions = [a[0] for a, _ in st.named("caption")]
    assert "10 ≤ Number of Samples (N) ≤ 1000" in captions


def test_generate_click_updates_preview_and_download() -> None:
    st = _FakeSt(clicked={"Generate Code"})
    panel = _panel()

    html_calls = _render(st, panel)

    assert "N = 500;" in html_calls[0]
    (_, dl_kwargs), = st.named("download_button")
    assert dl_kwargs["disabled"] is False
    assert dl_kwargs["file_name"] == "rls_denoise.m"
    assert dl_kwargs["data"] == panel.script.code.encode("utf-8")


def test_on_edit_clamps_and_mirrors_both_widgets() -> None:
    st = _FakeSt()
    panel = _panel()
    _render(st, panel)

    st.session_state["lms_num_num-samples"] = 5000
    lms_page._on_edit(st, panel, "num-samples", "lms_num_num-samples")

    assert panel.store.get_value("num-samples") == 1000
    assert st.session_state["lms_num_num-samples"] == 1000.0
    assert st.session_state["lms_slider_num-samples"] == 1000.0


def test_stale_caption_after_edit() -> None:
    panel = _panel()
    panel.generate()
    panel.set_value("noise-power", 0.005)
    st = _FakeSt()

    _render(st, panel)

    captions = [a[0] for a, _ in st.named("caption")]
    assert "Parameters changed since this script was generated." in captions


def test_run_click_renders_artifacts(monkeypatch) -> None:
    panel = _panel()

    async def _fake_submit(payload):
        return ["http://localhost:5000/a.png", "http://localhost:5000/b.png"]

    monkeypatch.setattr(panel.executor, "_submit", _fake_submit)
    st = _FakeSt(clicked={"Submit & Run"})

    _render(st, panel)

    assert st.named("spinner") == [(("Loading...",), {})]
    images = st.named("image")
    assert [a[0] for a, _ in images] == ["http://localhost:5000/a.png", "http://localhost:5000/b.png"]
    assert [k["caption"] for _, k in images] == ["Output 1", "Output 2"]


def test_failed_run_shows_warning_and_no_images(monkeypatch) -> None:
    panel = _panel()

    async def _fake_submit(payload):
        raise RuntimeError("service down")

    monkeypatch.setattr(panel.executor, "_submit", _fake_submit)
    st = _FakeSt(clicked={"Submit & Run"})

    _render(st, panel)

    assert panel.executor.status == RunStatus.ERROR
    assert st.named("image") == []
    (args, _), = st.named("warning")
    assert "service down" in args[0]


def test_reset_click_clears_widgets_and_reruns() -> None:
    panel = _panel()
    st = _FakeSt(clicked={"Reset"})
    called = []

    _render(st, panel, reset_panel=lambda: called.append(True))

    assert called == [True]
    assert st.reran is True
    assert "lms_num_step-size" not in st.session_state


def test_inputs_show_values_at_step_precision() -> None:
    st = _FakeSt()
    _render(st, _panel())

    num_formats = {k["key"]: k["format"] for _, k in st.named("number_input")}
    slider_formats = {k["key"]: k["format"] for _, k in st.named("slider")}

    assert num_formats == {
        "lms_num_step-size": "%.3f",
        "lms_num_num-samples": "%.0f",
        "lms_num_signal-power": "%.3f",
        "lms_num_noise-power": "%.3f",
    }
    assert slider_formats["lms_slider_noise-power"] == "%.3f"
    assert slider_formats["lms_slider_num-samples"] == "%.0f"
    # 0.001 rendered with the chosen format reads back unchanged.
    assert num_formats["lms_num_noise-power"] % 0.001 == "0.001"
