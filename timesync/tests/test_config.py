"""
Tests for environment settings.
"""

from timesync.config import Settings
from timesync.scene import SceneContext


def _clear(monkeypatch):
    for key in (
        "TIMESYNC_LOG_LEVEL",
        "TIMESYNC_LOG_FORMAT",
        "TIMESYNC_CAPTURE_STACK",
        "TIMESYNC_STACK_LIMIT",
        "TIMESYNC_FPS",
    ):
        monkeypatch.delenv(key, raising=False)


def test_defaults(monkeypatch):
    _clear(monkeypatch)

    assert Settings.from_env() == Settings()


def test_reads_environment(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("TIMESYNC_LOG_LEVEL", "debug")
    monkeypatch.setenv("TIMESYNC_LOG_FORMAT", "JSON")
    monkeypatch.setenv("TIMESYNC_CAPTURE_STACK", "off")
    monkeypatch.setenv("TIMESYNC_STACK_LIMIT", "5")
    monkeypatch.setenv("TIMESYNC_FPS", "60")

    settings = Settings.from_env()

    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"
    assert settings.capture_stack is False
    assert settings.stack_limit == 5
    assert settings.fps == 60


def test_invalid_values_fall_back(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("TIMESYNC_LOG_LEVEL", "LOUD")
    monkeypatch.setenv("TIMESYNC_LOG_FORMAT", "xml")
    monkeypatch.setenv("TIMESYNC_CAPTURE_STACK", "maybe")
    monkeypatch.setenv("TIMESYNC_STACK_LIMIT", "-3")
    monkeypatch.setenv("TIMESYNC_FPS", "fast")

    assert Settings.from_env() == Settings()


def test_scene_uses_settings_fps():
    scene = SceneContext("s", settings=Settings(fps=24))

    assert scene.playback.fps == 24
    assert scene.run_pass([1, "a"]) == [24]
