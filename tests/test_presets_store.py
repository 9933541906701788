from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from joule_app.adapters.presets_local.store import LocalPresetStore
from joule_app.orchestration.session import default_config, init_session, update_layer


def test_save_load_remove(tmp_path: Path) -> None:
    store = LocalPresetStore(tmp_path)
    cfg = update_layer(init_session(), "thickness_nm", 3, "350").config

    path = store.save("Thick Perovskite!", cfg)
    assert path.name == "thick-perovskite.json"
    assert store.list() == ["thick-perovskite"]

    loaded = store.load("Thick Perovskite!")
    assert loaded == cfg
    assert loaded.stack.thickness_nm[3] == 350.0

    assert store.exists("thick perovskite")
    assert store.remove("Thick Perovskite!") is True
    assert store.list() == []
    assert store.remove("Thick Perovskite!") is False


def test_missing_preset_names_what_is_available(tmp_path: Path) -> None:
    store = LocalPresetStore(tmp_path)
    store.save("baseline", default_config())
    with pytest.raises(FileNotFoundError, match=r"No preset named 'thin' .*available: baseline"):
        store.load("thin")


def test_load_rejects_misaligned_layers(tmp_path: Path) -> None:
    store = LocalPresetStore(tmp_path)
    data = default_config().model_dump()
    data["stack"]["rho"] = data["stack"]["rho"][:-1]
    store.path_for("broken").write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(ValidationError):
        store.load("broken")
