from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from joule_app.domain.models import ModelConfig

logger = logging.getLogger(__name__)


def _slugify(name: str) -> str:
    safe = "".join(c if c.isalnum() or c in ("-", "_") else "-" for c in name.strip())
    safe = "-".join(filter(None, safe.split("-")))
    return safe.lower() or "preset"


class LocalPresetStore:
    """Device/boundary presets stored as JSON in ``<base_dir>/<slug>.json``.

    Loading validates against ModelConfig, so a hand-edited file with
    mismatched layer arrays is rejected instead of reaching the solver.
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = Path(base_dir or Path.cwd() / "presets").resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def list(self) -> List[str]:
        return sorted(p.stem for p in self.base_dir.glob("*.json"))

    def path_for(self, name: str) -> Path:
        return self.base_dir / f"{_slugify(name)}.json"

    def save(self, name: str, cfg: ModelConfig) -> Path:
        path = self.path_for(name)
        data = cfg.model_dump()
        data["schema_version"] = cfg.version
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        logger.info("Saved preset %r to %s", name, path)
        return path

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def load(self, name: str) -> ModelConfig:
        path = self.path_for(name)
        if not path.is_file():
            available = ", ".join(self.list()) or "none"
            raise FileNotFoundError(f"No preset named {name!r} in {self.base_dir} (available: {available})")
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        data.pop("schema_version", None)
        return ModelConfig.model_validate(data)

    def remove(self, name: str) -> bool:
        """Delete a preset; False when there was nothing to delete."""
        path = self.path_for(name)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Removed preset %r", name)
        return True
