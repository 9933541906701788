#"""
#Plotly-based presenter implementing PlotPresenter.
#"""
from __future__ import annotations

import numpy as np
import plotly.graph_objects as go

from joule_app.domain.models import SimulationResult
from joule_app.domain.ports import PlotPresenter
from joule_app.postprocessing.geometry import display_domain, label_anchors, layer_segments
from joule_app.postprocessing.profiles import (
    center_time_trace,
    final_active_profile,
    heatmap_samples,
    wavy_glass_profile,
)

GLASS_COLOR = "#dc2626"
ACTIVE_COLOR = "#2563eb"
TRACE_COLOR = "#16a34a"


class PlotPresenterPlotly(PlotPresenter):
    def profile_plot(self, result: SimulationResult) -> go.Figure:
        wavy = wavy_glass_profile(result)
        active = final_active_profile(result)
        segments = layer_segments(result)
        x_min, x_max = display_domain(result)

        fig = go.Figure()
        for seg in segments:
            fig.add_vrect(x0=seg.x1, x1=seg.x2, fillcolor=seg.color, opacity=0.15, line_width=0, layer="below")
        for seg in segments:
            fig.add_vline(x=seg.x2, line_dash="dash", line_color="#888", opacity=0.5)
        fig.add_trace(go.Scatter(x=wavy["position_nm"], y=wavy["temperature"],
                                 mode="lines",
                                 name="Glass (compressed)",
                                 line=dict(color=GLASS_COLOR, width=2)))
        fig.add_trace(go.Scatter(x=active["position_nm"], y=active["temperature"],
                                 mode="lines",
                                 name="Active layers",
                                 line=dict(color=ACTIVE_COLOR, width=2)))
        # labels are placed in paper coordinates, so the x range must match the anchors' domain
        for label in label_anchors(segments, x_min=x_min, x_max=x_max):
            fig.add_annotation(x=label.x_percent / 100.0, xref="paper", y=1.0, yref="paper",
                               yanchor="bottom", text=f"<b>{label.name}</b>", showarrow=False,
                               bgcolor="rgba(255, 255, 255, 0.8)", font=dict(size=12, color="#333"))
        fig.update_layout(
            xaxis_title="Position from ITO/Glass interface (nm)",
            yaxis_title="Temperature (°C)",
            template="plotly_white",
            title=f"Final temperature profile (t = {result.final_time:.1f} s)",
            margin=dict(t=100),
        )
        fig.update_xaxes(range=[x_min, x_max])
        return fig

    def center_trace_plot(self, result: SimulationResult) -> go.Figure:
        trace = center_time_trace(result)
        fig = go.Figure()
        fig.add_trace(go.Scatter(x=trace["time_s"], y=trace["temperature"],
                                 mode="lines",
                                 name="Perovskite center temperature",
                                 line=dict(color=TRACE_COLOR, width=2)))
        fig.update_layout(
            xaxis_title="Time (s)",
            yaxis_title="Temperature (°C)",
            template="plotly_white",
            title="Temperature at perovskite layer center vs time",
        )
        return fig

    def heatmap_plot(self, result: SimulationResult) -> go.Figure:
        samples = heatmap_samples(result)
        if samples.empty:
            return go.Figure()
        n_t, n_x = len(result.time), len(result.position_nm)
        # samples are time-major, so a plain reshape gives z[time][position]
        z = samples["temperature"].to_numpy(dtype=float).reshape(n_t, n_x)
        fig = go.Figure(
            data=go.Heatmap(
                x=np.asarray(result.position_nm, dtype=float),
                y=np.asarray(result.time, dtype=float),
                z=z,
                colorbar=dict(title="T (°C)"),
            )
        )
        fig.update_layout(
            xaxis_title="Position from ITO/Glass interface (nm)",
            yaxis_title="Time (s)",
            template="plotly_white",
            title="Temperature T(x, t)",
        )
        return fig
