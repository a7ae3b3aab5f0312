from __future__ import annotations

from lab_panel.core.contracts import RunStatus
from lab_panel.ui import components
from lab_panel.ui.formatting import bounds_label, parameters_frame, widget_format


def _number_key(param_id: str) -> str:
    return f"lms_num_{param_id}"


def _slider_key(param_id: str) -> str:
    return f"lms_slider_{param_id}"


def _on_edit(st, panel, param_id: str, source_key: str) -> None:
    """Clamp the edited widget value and mirror it into both widgets."""
    panel.set_value(param_id, st.session_state.get(source_key))
    value = float(panel.store.get_value(param_id))
    st.session_state[_number_key(param_id)] = value
    st.session_state[_slider_key(param_id)] = value


def _sync_widget_state(st, panel) -> None:
    for p in panel.parameters():
        st.session_state.setdefault(_number_key(p.id), float(p.value))
        st.session_state.setdefault(_slider_key(p.id), float(p.value))


def _clear_widget_state(st, panel) -> None:
    for p in panel.parameters():
        st.session_state.pop(_number_key(p.id), None)
        st.session_state.pop(_slider_key(p.id), None)


def _render_parameter_inputs(st, panel) -> None:
    st.markdown("**Select the input Parameters**")
    for p in panel.parameters():
        st.caption(bounds_label(p))
        fmt = widget_format(p)
        c_num, c_slider = st.columns([1, 3])
        with c_num:
            # No min/max here so out-of-range entries reach the store and get clamped.
            st.number_input(
                p.label,
                step=float(p.step),
                format=fmt,
                key=_number_key(p.id),
                on_change=_on_edit,
                args=(st, panel, p.id, _number_key(p.id)),
                label_visibility="collapsed",
            )
        with c_slider:
            st.slider(
                p.label,
                min_value=float(p.min),
                max_value=float(p.max),
                step=float(p.step),
                format=fmt,
                key=_slider_key(p.id),
                on_change=_on_edit,
                args=(st, panel, p.id, _slider_key(p.id)),
                label_visibility="collapsed",
            )


def render_lms_page(
    *,
    st,
    components_html,
    run_async,
    panel,
    reset_panel,
) -> None:
    st.subheader("LMS Channel Equalization")

    _sync_widget_state(st, panel)

    col_code, col_params = st.columns([3, 2])

    with col_params:
        _render_parameter_inputs(st, panel)
        if st.button("Generate Code", key="lms_generate"):
            panel.generate()
        with st.expander("Current values"):
            st.dataframe(parameters_frame(panel.parameters()), hide_index=True)

    with col_code:
        components.render_script_preview(components_html, panel.display)
        if panel.script_is_stale():
            st.caption("Parameters changed since this script was generated.")

        c_dl, c_run, c_reset = st.columns(3)
        with c_dl:
            dl = panel.download()
            st.download_button(
                "Download",
                data=dl.data if dl is not None else b"",
                file_name=dl.file_name if dl is not None else panel.config.script.download_name,
                mime=dl.mime if dl is not None else "text/plain",
                disabled=dl is None,
                key="lms_download",
            )
        with c_run:
            run_clicked = st.button("Submit & Run", key="lms_run")
        with c_reset:
            if st.button("Reset", key="lms_reset"):
                _clear_widget_state(st, panel)
                reset_panel()
                st.rerun()

    if run_clicked:
        with st.spinner("Loading..."):
            run_async(panel.run())

    executor = panel.executor
    if executor.loading:
        components.render_loading(st)
    elif executor.show_results:
        components.render_artifacts(st, list(executor.result.artifact_urls))
    elif executor.status == RunStatus.ERROR:
        components.render_run_error(st, executor.last_error)
