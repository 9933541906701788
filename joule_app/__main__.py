from __future__ import annotations

import sys
from pathlib import Path

from joule_app.core.config import get_settings


def main() -> None:
    """
    CLI entry.

    Keep this minimal: we do not import Streamlit here to avoid import-time
    side effects during packaging. Print a friendly hint.
    """
    settings = get_settings()
    repo_root = Path(__file__).resolve().parent.parent
    ui_script = repo_root / "ui_streamlit" / "app.py"
    msg = (
        f"{settings.app_name}\n"
        f"Project root: {repo_root}\n"
        f"Simulation service: {settings.service_url} (set JOULE_SERVICE_URL to change)\n"
        f"Run the app with:\n\n"
        f"    streamlit run {ui_script}\n"
    )
    sys.stdout.write(msg)


if __name__ == "__main__":
    main()
