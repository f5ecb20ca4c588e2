import importlib.util
import logging
from pathlib import Path

import pytest
import yaml

from config.config_loader import load_config

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"


def load_script(name):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def bad_config(tmp_path):
    data = load_config().to_dict()
    data["simulator"] = {**data["simulator"], "fraud_rate": 2.0}
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump(data))
    return str(path)


@pytest.mark.parametrize("script", ["start_dashboard", "train_model"])
def test_invalid_config_is_logged_and_exits_with_error(
    script, bad_config, monkeypatch, caplog
):
    module = load_script(script)
    monkeypatch.setattr("sys.argv", [f"{script}.py", "--config", bad_config])

    with caplog.at_level(logging.ERROR):
        assert module.main() == 1

    assert "fraud_rate" in caplog.text


@pytest.mark.parametrize("script", ["start_dashboard", "train_model"])
def test_missing_config_is_logged_and_exits_with_error(
    script, tmp_path, monkeypatch, caplog
):
    module = load_script(script)
    missing = str(tmp_path / "absent.yaml")
    monkeypatch.setattr("sys.argv", [f"{script}.py", "--config", missing])

    with caplog.at_level(logging.ERROR):
        assert module.main() == 1

    assert "not found" in caplog.text
