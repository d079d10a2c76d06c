import logging

import pytest

from tryon_app import app
from tryon_app.cli import build_parser, load_config, main
from tryon_app.config import AppConfig
from tryon_app.core.types import AccessoryType
from tryon_app.sources import mediapipe_source

from tests.helpers import FakeSource


def test_cli_overrides_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("camera_index: 3\nrender:\n  accessory: ring\n")

    args = build_parser().parse_args(["--config", str(path), "--accessory", "tiara", "--camera", "1"])
    config = load_config(args)

    assert config.render.accessory is AccessoryType.TIARA
    assert config.camera_index == 1


def test_write_config(tmp_path):
    path = tmp_path / "written.yaml"

    assert main(["--write-config", str(path), "--accessory", "ring"]) == 0

    loaded = AppConfig.from_yaml(path)
    assert loaded.render.accessory is AccessoryType.RING


def test_bad_config_file(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("render:\n  accessory: crown\n")

    assert main(["--config", str(path)]) == 1


def test_output_requires_video(tmp_path):
    with pytest.raises(SystemExit):
        main(["--output", str(tmp_path / "out.mp4")])


def test_missing_video_fails(tmp_path):
    assert main(["--video", str(tmp_path / "missing.mp4")]) == 1


def test_unknown_accessory_choice():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--accessory", "crown"])


@pytest.fixture
def fake_source(monkeypatch):
    monkeypatch.setattr(mediapipe_source, "MediaPipeLandmarkSource", lambda config: FakeSource(None))


@pytest.fixture
def empty_history_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("tracker:\n  history_size: 0\n")
    return path


def test_zero_history_size_fails_video_mode(fake_source, empty_history_config, tmp_path, capsys):
    code = main(["--config", str(empty_history_config), "--video", str(tmp_path / "clip.mp4")])

    assert code == 1
    out = capsys.readouterr().out
    assert "history_size" in out
    assert "Error initializing pipeline" in out


def test_zero_history_size_fails_camera_mode(fake_source, empty_history_config):
    assert main(["--config", str(empty_history_config)]) == 1


def test_setup_logging_replaces_its_handler():
    root = logging.getLogger()
    level = root.level
    try:
        app.setup_logging(logging.INFO)
        count = len(root.handlers)

        app.setup_logging(logging.DEBUG)

        assert len(root.handlers) == count
        assert app._console_handler in root.handlers
        assert app._console_handler.level == logging.DEBUG
    finally:
        root.removeHandler(app._console_handler)
        app._console_handler = None
        root.setLevel(level)
