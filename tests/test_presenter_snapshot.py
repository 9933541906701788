from __future__ import annotations

import numpy as np

from joule_app.postprocessing.geometry import layer_segments


def test_profile_plot_snapshot_like(profile_fig, mock_result):
    fig = profile_fig
    names = [tr.name for tr in fig.data]
    assert names == ["Glass (compressed)", "Active layers"]
    # Axis titles are stable by contract
    assert fig.layout.xaxis.title.text == "Position from ITO/Glass interface (nm)"
    assert fig.layout.yaxis.title.text == "Temperature (°C)"
    assert fig.layout.title.text == "Final temperature profile (t = 1000.0 s)"
    assert tuple(fig.layout.xaxis.range) == (-200.0, 580.0)

    wavy_x = np.array(fig.data[0].x)
    assert wavy_x.size == 51 and wavy_x[0] == -200.0 and wavy_x[-1] == 0.0
    active_x = np.array(fig.data[1].x)
    assert active_x.size == len(mock_result.position_active_nm)

    n_seg = len(layer_segments(mock_result))
    # one band + one boundary line per layer, one label per layer plus the substrate
    assert len(fig.layout.shapes) == 2 * n_seg
    texts = [a.text for a in fig.layout.annotations]
    assert len(texts) == n_seg + 1
    assert "Glass (compressed)" in texts[0]
    assert "Perovskite" in texts[3]


def test_center_trace_plot(presenter, mock_result):
    fig = presenter.center_trace_plot(mock_result)
    assert len(fig.data) == 1
    y = np.array(fig.data[0].y)
    assert y.size == len(mock_result.time)
    # starts at ambient and heats up
    assert abs(y[0] - 25.0) < 1e-6 and y[-1] > y[0]


def test_heatmap_structure(presenter, small_result):
    fig = presenter.heatmap_plot(small_result)
    assert len(fig.data) == 1
    heat = fig.data[0]
    assert heat.type == "heatmap"
    z = np.array(heat.z)
    assert z.shape == (len(small_result.time), len(small_result.position_nm))
    assert z[2, 4] == small_result.temperature[4][2]
