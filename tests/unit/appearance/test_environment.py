"""Tests for platform and GUI detection."""

import pytest

from tintswitch.appearance.environment import (
    GUI_ENV_MARKERS,
    Platform,
    detect_platform,
    env_flag,
    is_gui_environment,
    parse_platform,
)


class TestDetectPlatform:
    """Tests for detect_platform."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("darwin", Platform.MACOS),
            ("win32", Platform.WINDOWS),
            ("cygwin", Platform.WINDOWS),
            ("linux", Platform.LINUX),
            ("freebsd14", Platform.LINUX),
            ("emscripten", Platform.OTHER),
        ],
    )
    def test_mapping(self, value: str, expected: Platform) -> None:
        assert detect_platform(value) is expected

    def test_defaults_to_running_platform(self) -> None:
        assert isinstance(detect_platform(), Platform)


class TestParsePlatform:
    """Tests for parse_platform."""

    def test_known_value(self) -> None:
        assert parse_platform(" MacOS ") is Platform.MACOS

    @pytest.mark.parametrize("value", [None, "", "auto", "beos"])
    def test_auto_or_unknown(self, value: str | None) -> None:
        assert parse_platform(value) is None


class TestIsGuiEnvironment:
    """Tests for is_gui_environment."""

    def test_plain_terminal(self) -> None:
        assert not is_gui_environment({"TERM": "xterm-256color"})

    @pytest.mark.parametrize("marker", GUI_ENV_MARKERS)
    def test_each_marker(self, marker: str) -> None:
        assert is_gui_environment({marker: "1"})

    @pytest.mark.parametrize("value", ["", "0", "false", "NO", "off"])
    def test_falsy_marker_values(self, value: str) -> None:
        assert not is_gui_environment({"NEOVIDE": value})

    def test_explicit_flag_wins(self) -> None:
        assert is_gui_environment({}, gui_flag=True)

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert not is_gui_environment()
        monkeypatch.setenv("NVIM_QT", "yes")
        assert is_gui_environment()


class TestEnvFlag:
    """Tests for env_flag."""

    @pytest.mark.parametrize(("value", "expected"), [("1", True), ("On", True), ("no", False), ("0", False)])
    def test_recognised(self, value: str, expected: bool) -> None:
        assert env_flag("FLAG", {"FLAG": value}) is expected

    @pytest.mark.parametrize("env", [{}, {"FLAG": ""}, {"FLAG": "maybe"}])
    def test_unset_or_unrecognised(self, env: dict[str, str]) -> None:
        assert env_flag("FLAG", env) is None
