# --- standard library / typing ----------------------------------------------------------
from __future__ import annotations

from pathlib import Path

# --- third-party -----------------------------------------------------------------------
import streamlit as st

# --- first-party: presets & registry ---------------------------------------------------
from joule_app.adapters.presets_local.store import LocalPresetStore
from joule_app.adapters.registry import list_services, make_service
from joule_app.core.config import configure_logging, get_settings
from joule_app.domain.models import GLOBAL_FIELDS, LAYER_FIELDS
from joule_app.domain.ports import SimulationService

# --- first-party: exporting and plotting -----------------------------------------------
from joule_app.exporting.io import (
    CSV_MIME,
    HTML_MIME,
    csv_file_name,
    figure_to_png_bytes,
    heatmap_table,
    html_file_name,
    profile_html,
    profile_table,
    to_csv_bytes,
)

# --- first-party: orchestration & configuration ----------------------------------------
from joule_app.orchestration.session import (
    AppState,
    config_issues,
    init_session,
    reset,
    run_simulation,
    update_global,
    update_layer,
)
from joule_app.plotting_plotly.presenter import PlotPresenterPlotly
from joule_app.postprocessing.geometry import stack_layer_color

# --------------------------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------------------------
settings = get_settings()
configure_logging(settings.log_level)

st.set_page_config(page_title=settings.app_name, layout="wide")
st.title(settings.app_name)
st.caption("Heat dissipation in PeLED operation using the 1D heat equation")

if "app" not in st.session_state:
    st.session_state.app = init_session()

presenter = PlotPresenterPlotly()
presets = LocalPresetStore(Path(settings.presets_dir))

LAYER_LABELS = {
    "thickness_nm": "Thickness (nm)",
    "k_therm": "Thermal conductivity (W/m·K)",
    "rho": "Density (kg/m³)",
    "c_p": "Specific heat (J/kg·K)",
}
GLOBAL_LABELS = {
    "voltage": "Voltage (V)",
    "current_density": "Current density (A/m²)",
    "eqe": "EQE",
    "epsilon_top": "Top emissivity (cathode)",
    "epsilon_bottom": "Bottom emissivity (glass)",
    "h_conv": "Convection coefficient (W/m²·K)",
    "T_ambient_C": "Ambient temperature (°C)",
    "t_start": "Start time (s)",
    "t_end": "End time (s)",
}


def _widget_keys() -> list[str]:
    n = len(st.session_state.app.config.stack.names)
    keys = [f"layer_{f}_{i}" for f in LAYER_FIELDS for i in range(n)]
    return keys + [f"global_{f}" for f in GLOBAL_FIELDS]


def _clear_widgets() -> None:
    for key in _widget_keys():
        st.session_state.pop(key, None)


# --------------------------------------------------------------------------------------
# Sidebar: service selection & presets
# --------------------------------------------------------------------------------------
st.sidebar.header("Simulation service")
service_name = st.sidebar.selectbox("Service", list_services(), index=0)
service_kwargs: dict[str, object] = {}
if service_name == "Simulation service (HTTP)":
    service_kwargs["base_url"] = st.sidebar.text_input("Service URL", value=settings.service_url)

with st.sidebar.expander("Presets", expanded=False):
    name = st.text_input("Preset name", value="my_device")
    c1, c2, c3 = st.columns(3)
    with c1:
        if st.button("Save", use_container_width=True):
            presets.save(name, st.session_state.app.config)
            st.success(f"Preset '{name}' saved.", icon="💾")
    with c2:
        if st.button("Load", use_container_width=True):
            try:
                cfg = presets.load(name)
            except (OSError, ValueError) as e:
                st.error(f"Could not load preset '{name}': {e}")
            else:
                st.session_state.app = st.session_state.app.model_copy(update={"config": cfg})
                _clear_widgets()
                st.rerun()
    with c3:
        if st.button("Delete", use_container_width=True):
            if presets.remove(name):
                st.warning(f"Preset '{name}' deleted.", icon="🗑️")
            else:
                st.info(f"No preset named '{name}'.")
    st.caption(f"Available: {', '.join(presets.list()) or '(none)'}")

# --------------------------------------------------------------------------------------
# Device structure
# --------------------------------------------------------------------------------------
head, reset_col = st.columns([4, 1])
with head:
    st.subheader("Device structure and layer properties")
with reset_col:
    if st.button("Reset to defaults", use_container_width=True):
        st.session_state.app = reset(st.session_state.app)
        _clear_widgets()
        st.rerun()

state: AppState = st.session_state.app
stack = state.config.stack
cols = st.columns(len(stack.names))
for i, (col, layer) in enumerate(zip(cols, stack.names)):
    with col:
        st.markdown(
            f"<div style='background:{stack_layer_color(i)};border-radius:4px;"
            f"padding:2px 8px;font-weight:600'>{layer}</div>",
            unsafe_allow_html=True,
        )
        for field in LAYER_FIELDS:
            current = getattr(state.config.stack, field)[i]
            text = st.text_input(LAYER_LABELS[field], value=f"{current:g}", key=f"layer_{field}_{i}")
            if text != f"{current:g}":
                state = update_layer(state, field, i, text)

st.subheader("Electrical, thermal and time parameters")
gcols = st.columns(3)
for j, field in enumerate(GLOBAL_FIELDS):
    section = state.config.time if field in ("t_start", "t_end") else state.config.boundary
    current = getattr(section, field)
    with gcols[j % 3]:
        text = st.text_input(GLOBAL_LABELS[field], value=f"{current:g}", key=f"global_{field}")
    if text != f"{current:g}":
        state = update_global(state, field, text)

st.session_state.app = state
for issue in config_issues(state.config):
    st.warning(issue)

# --------------------------------------------------------------------------------------
# Run
# --------------------------------------------------------------------------------------
# One service per (name, URL) for the whole session; the replaced one is closed.
service_key = (service_name, service_kwargs.get("base_url"))
if st.session_state.get("service_key") != service_key:
    previous = st.session_state.get("service")
    if previous is not None:
        previous.close()
    st.session_state.service = make_service(service_name, **service_kwargs)
    st.session_state.service_key = service_key
service: SimulationService = st.session_state.service
if st.button(
    "Running simulation..." if state.busy else "Run simulation",
    disabled=state.busy,
    type="primary",
):
    with st.spinner("Running simulation..."):
        st.session_state.app = run_simulation(state, service)
    state = st.session_state.app

if state.error:
    st.error(state.error)

result = state.result
if result is None:
    st.info("Run a simulation to see results.")
    st.stop()

# --------------------------------------------------------------------------------------
# Results
# --------------------------------------------------------------------------------------
tab1, tab2, tab3 = st.tabs(["Final profile", "Perovskite center vs time", "T(x, t) map"])

with tab1:
    fig = presenter.profile_plot(result)
    st.plotly_chart(fig, use_container_width=True)

    table = profile_table(result)
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.download_button(
            "Download CSV",
            data=to_csv_bytes(table),
            file_name=csv_file_name(result),
            mime=CSV_MIME,
        )
    with c2:
        st.download_button(
            "Download table (HTML)",
            data=profile_html(result).encode("utf-8"),
            file_name=html_file_name(result),
            mime=HTML_MIME,
        )
    with c3:
        st.download_button(
            "Print view (save as PDF)",
            data=profile_html(result, auto_print=True).encode("utf-8"),
            file_name=html_file_name(result),
            mime=HTML_MIME,
        )
    with c4:
        try:
            png = figure_to_png_bytes(fig)
            st.download_button(
                "Download PNG",
                data=png,
                file_name=f"temperature_profile_t{result.final_time:.1f}s.png",
                mime="image/png",
            )
        except RuntimeError as e:
            st.info(str(e))
    with st.expander("Table", expanded=False):
        st.dataframe(table, hide_index=True, use_container_width=True)

with tab2:
    st.plotly_chart(presenter.center_trace_plot(result), use_container_width=True)

with tab3:
    st.plotly_chart(presenter.heatmap_plot(result), use_container_width=True)
    st.download_button(
        "Download CSV (map, long format)",
        data=to_csv_bytes(heatmap_table(result)),
        file_name="temperature_map_long.csv",
        mime=CSV_MIME,
    )

# --------------------------------------------------------------------------------------
# Footer
# --------------------------------------------------------------------------------------
st.caption(
    f"Service: **{service_name}** · Layers: **{', '.join(result.layer_names)}** · "
    f"Presets path: `{presets.base_dir}`"
)
