import pytest
from pydantic import ValidationError

from recallkit.application.config import AppConfig, resolve_config


def test_defaults(mock_home):
    config = resolve_config()
    assert config.scheduler == "legacy"
    assert config.desired_retention == 0.9
    assert config.fsrs_parameters is None
    assert config.target_step_tolerance == 3
    assert config.stream_read_size == 4096


def test_env_override(mock_home, monkeypatch):
    monkeypatch.setenv("RECALLKIT_SCHEDULER", "fsrs")
    monkeypatch.setenv("RECALLKIT_TARGET_STEP_TOLERANCE", "5")
    config = resolve_config()
    assert config.scheduler == "fsrs"
    assert config.target_step_tolerance == 5


def test_toml_file_is_read(mock_home):
    cfg_dir = mock_home / ".config/recallkit"
    cfg_dir.mkdir(parents=True)
    (cfg_dir / "config.toml").write_text('scheduler = "fsrs"\ndesired_retention = 0.85\n')

    config = resolve_config()
    assert config.scheduler == "fsrs"
    assert config.desired_retention == 0.85


def test_cli_overrides_win_and_none_is_ignored(mock_home, monkeypatch):
    monkeypatch.setenv("RECALLKIT_STREAM_READ_SIZE", "128")
    config = resolve_config({"stream_read_size": 16, "scheduler": None})
    assert config.stream_read_size == 16
    assert config.scheduler == "legacy"


@pytest.mark.parametrize("retention", [0.0, 1.0, 1.5, -0.2])
def test_invalid_retention_rejected(mock_home, retention):
    with pytest.raises(ValidationError):
        AppConfig(desired_retention=retention)


def test_invalid_scheduler_rejected(mock_home):
    with pytest.raises(ValidationError):
        AppConfig(scheduler="sm2")
