"""Tests for the demonstration scenario and the CLI entry point."""

import logging
from unittest.mock import patch

import pytest

from eventregistry import app
from eventregistry.lib.events import ErrorPolicy, EventRegistry
from eventregistry.lib.preference_manager import PreferenceManager


@pytest.fixture
def example_registry(recorder):
    """Example wiring with the module-level callbacks swapped for recorders."""
    with patch.object(app, "function_one", recorder.callback("functionOne")), patch.object(
        app, "function_two", recorder.callback("functionTwo")
    ), patch.object(app, "function_three", recorder.callback("functionThree")):
        yield app.register_example_callbacks(EventRegistry())


@pytest.mark.parametrize(
    "event_name, expected",
    [
        ("eventOne", ["functionOne", "functionTwo"]),
        ("eventTwo", ["functionThree"]),
        ("eventThree", ["functionOne", "functionThree"]),
        ("eventFour", []),
    ],
)
def test_example_scenario(example_registry, recorder, event_name, expected):
    example_registry.emit(event_name)
    assert recorder.calls == expected


def test_run_example_emits_every_event_in_turn(example_registry, recorder):
    app.run_example(example_registry)

    assert recorder.calls == [
        "functionOne",
        "functionTwo",
        "functionThree",
        "functionOne",
        "functionThree",
    ]


def test_example_registry_contents(example_registry):
    snapshot = example_registry.snapshot()

    assert sorted(snapshot) == ["eventOne", "eventThree", "eventTwo"]
    assert "eventFour" not in example_registry


class TestMain:
    """Tests for the CLI entry point."""

    def test_runs_scenario_and_logs_calls(self, tmp_path, restore_logging):
        log_dir = tmp_path / "logs"
        config = tmp_path / "config.ini"

        exit_code = app.main(["-c", str(config), "--log-dir", str(log_dir), "-l", "INFO"])

        assert exit_code == 0
        log_files = list(log_dir.glob("*.log"))
        assert len(log_files) == 1
        content = log_files[0].read_text()
        assert content.count("functionOne called") == 2
        assert content.count("functionTwo called") == 1
        assert content.count("functionThree called") == 2
        assert "Emitting 'eventFour' (0 callback(s))" in content

    def test_cli_error_policy_is_persisted(self, tmp_path, restore_logging):
        config = tmp_path / "config.ini"

        app.main(["-c", str(config), "--log-dir", str(tmp_path), "--error-policy", "propagate"])

        assert PreferenceManager(str(config)).get("error_policy") == "propagate"

    def test_error_policy_read_from_config(self, tmp_path, restore_logging):
        config = tmp_path / "config.ini"
        PreferenceManager(str(config)).set("error_policy", "propagate")
        seen = []

        original = app.register_example_callbacks

        def capture(registry):
            seen.append(registry.error_policy)
            return original(registry)

        with patch.object(app, "register_example_callbacks", side_effect=capture):
            app.main(["-c", str(config), "--log-dir", str(tmp_path)])

        assert seen == [ErrorPolicy.PROPAGATE]

    def test_invalid_config_returns_error(self, tmp_path, capsys):
        config = tmp_path / "config.ini"
        config.write_text("[REGISTRY]\nerror_policy = ignore\n")

        exit_code = app.main(["-c", str(config), "--log-dir", str(tmp_path)])

        assert exit_code == 2
        assert "Invalid setting" in capsys.readouterr().err

    def test_log_level_name_in_config(self, tmp_path, restore_logging):
        config = tmp_path / "config.ini"
        config.write_text("[REGISTRY]\nlog_level = DEBUG\n")

        exit_code = app.main(["-c", str(config), "--log-dir", str(tmp_path / "logs")])

        assert exit_code == 0
        assert logging.getLogger().level == logging.DEBUG
        content = next((tmp_path / "logs").glob("*.log")).read_text()
        assert "Registered events:" in content

    def test_invalid_log_level_in_config_returns_error(self, tmp_path, capsys):
        config = tmp_path / "config.ini"
        config.write_text("[REGISTRY]\nlog_level = loud\n")

        exit_code = app.main(["-c", str(config), "--log-dir", str(tmp_path)])

        assert exit_code == 2
        assert "Invalid log level: loud" in capsys.readouterr().err
