from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from miplib.backends.base import BackendKind
from miplib.config import IndicatorPolicy, Settings, config_file, load_settings, miplib_home, save_settings


def test_defaults_without_config_file(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MIPLIB_HOME", str(tmp_path / "miplib-home"))

    settings = load_settings()

    assert settings.backend == BackendKind.ANY
    assert settings.indicator_policy == IndicatorPolicy.REFORMULATE_IF_UNSUPPORTED
    assert not settings.scale_constraints
    assert (settings.scale_skip_lb, settings.scale_skip_ub) == (1e-4, 1e4)
    assert settings.amplitude_warning == 1e8


def test_home_follows_environment(monkeypatch, tmp_path: Path) -> None:
    home = tmp_path / "miplib-home"
    monkeypatch.setenv("MIPLIB_HOME", str(home))

    assert miplib_home() == home.resolve()
    assert config_file() == home.resolve() / "config.yaml"


def test_save_and_load(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MIPLIB_HOME", str(tmp_path / "miplib-home"))
    settings = Settings(
        backend=BackendKind.LOCAL,
        indicator_policy=IndicatorPolicy.NATIVE,
        scale_constraints=True,
        scale_skip_ub=1e3,
    )

    path = save_settings(settings)
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))

    assert raw["backend"] == "local"
    assert raw["indicator_policy"] == "native"
    assert load_settings() == settings


def test_partial_config_keeps_defaults(monkeypatch, tmp_path: Path) -> None:
    home = tmp_path / "miplib-home"
    monkeypatch.setenv("MIPLIB_HOME", str(home))
    home.mkdir()
    (home / "config.yaml").write_text("scale_constraints: true\n", encoding="utf-8")

    settings = load_settings()

    assert settings.scale_constraints
    assert settings.backend == BackendKind.ANY


@pytest.mark.parametrize("content", ["", "- just\n- a list\n", "backend: [unclosed\n"])
def test_unusable_config_falls_back_to_defaults(monkeypatch, tmp_path: Path, content: str) -> None:
    home = tmp_path / "miplib-home"
    monkeypatch.setenv("MIPLIB_HOME", str(home))
    home.mkdir()
    (home / "config.yaml").write_text(content, encoding="utf-8")

    assert load_settings() == Settings()


def test_invalid_values_are_rejected(monkeypatch, tmp_path: Path) -> None:
    home = tmp_path / "miplib-home"
    monkeypatch.setenv("MIPLIB_HOME", str(home))
    home.mkdir()
    (home / "config.yaml").write_text("indicator_policy: sometimes\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_settings()


@pytest.mark.parametrize(
    "overrides",
    [
        {"scale_skip_lb": 0.0},
        {"scale_skip_lb": 10.0, "scale_skip_ub": 1.0},
        {"amplitude_warning": 1.0},
    ],
)
def test_scaling_settings_are_validated(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(**overrides)
