from __future__ import annotations

import io
from typing import Any

import pandas as pd

from joule_app.domain.models import SimulationResult
from joule_app.postprocessing.profiles import (
    final_active_profile,
    final_glass_profile,
    heatmap_samples,
)

POSITION_COL = "Position (nm)"
TEMPERATURE_COL = "Temperature (°C)"
CSV_MIME = "text/csv"
HTML_MIME = "text/html"

_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: Arial, sans-serif; padding: 20px; background: #f5f5f5; }}
.container {{ background: white; padding: 20px; border-radius: 8px; }}
h1 {{ color: #333; margin-bottom: 20px; }}
table {{ width: 100%; border-collapse: collapse; margin-top: 20px; }}
th, td {{ padding: 10px; text-align: left; border-bottom: 1px solid #ddd; }}
th {{ background-color: #4a90e2; color: white; }}
@media print {{ body {{ background: white; }} }}
</style>
</head>
<body>
<div class="container">
<h1>Final temperature profile (t = {t_final:.1f} s)</h1>
{table}
</div>
{script}</body>
</html>
"""

_PRINT_SCRIPT = "<script>window.onload = function() { window.print(); };</script>\n"


def profile_table(result: SimulationResult | None) -> pd.DataFrame:
    """Final-time rows: substrate samples (if any) followed by the active stack."""
    parts = [p for p in (final_glass_profile(result), final_active_profile(result)) if not p.empty]
    if not parts:
        return pd.DataFrame(columns=[POSITION_COL, TEMPERATURE_COL], dtype=float)
    df = pd.concat(parts, ignore_index=True)
    return df.rename(columns={"position_nm": POSITION_COL, "temperature": TEMPERATURE_COL})


def heatmap_table(result: SimulationResult | None) -> pd.DataFrame:
    """Long-form T(x, t) table for the full grid."""
    return heatmap_samples(result).rename(
        columns={"time_s": "Time (s)", "position_nm": POSITION_COL, "temperature": TEMPERATURE_COL}
    )


def csv_file_name(result: SimulationResult) -> str:
    return f"temperature_profile_t{result.final_time:.1f}s.csv"


def html_file_name(result: SimulationResult) -> str:
    return f"temperature_profile_t{result.final_time:.1f}s.html"


def profile_html(result: SimulationResult, *, auto_print: bool = False) -> str:
    """Standalone HTML page with the final-time table (positions .2f, temperatures .4f).

    ``auto_print`` opens the browser print dialog on load (save-as-PDF view).
    """
    df = profile_table(result)
    table = df.to_html(
        index=False,
        border=0,
        formatters={
            POSITION_COL: "{:.2f}".format,
            TEMPERATURE_COL: "{:.4f}".format,
        },
    )
    return _HTML_TEMPLATE.format(
        title=f"Temperature Profile - t = {result.final_time:.1f} s",
        t_final=result.final_time,
        table=table,
        script=_PRINT_SCRIPT if auto_print else "",
    )


def figure_to_png_bytes(fig: Any) -> bytes:
    """Export a Plotly figure to PNG bytes via Kaleido.
    Raises RuntimeError with a helpful message when Kaleido is not available.
    """
    try:
        return fig.to_image(format="png", engine="kaleido")
    except Exception as e:  # noqa: BLE001
        raise RuntimeError(
            "Static image export requires the optional 'export' extra: pip install -e '.[export]'"
        ) from e


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    buf = io.StringIO()
    df.to_csv(buf, index=False, lineterminator="\n")
    return buf.getvalue().encode("utf-8")
