"""Unit tests for preference stores."""

import pytest
import yaml

from junkcheck.preferences import MemoryPreferences, YamlPreferences


class TestMemoryPreferences:
    def test_get_set_remove(self):
        prefs = MemoryPreferences()
        assert prefs.get_boolean("blocklist.Spamcop") is None

        prefs.set_boolean("blocklist.Spamcop", False)
        assert prefs.get_boolean("blocklist.Spamcop") is False

        prefs.remove("blocklist.Spamcop")
        prefs.remove("blocklist.Spamcop")
        assert prefs.get_boolean("blocklist.Spamcop") is None

    def test_initial_values(self):
        prefs = MemoryPreferences({"a": True})
        assert prefs.keys() == ["a"]


class TestYamlPreferences:
    def test_missing_file_is_empty(self, tmp_path):
        prefs = YamlPreferences(tmp_path / "prefs.yaml")
        assert prefs.get_boolean("blocklist.Barracuda") is None

    def test_persists_changes(self, tmp_path):
        path = tmp_path / "state" / "prefs.yaml"
        prefs = YamlPreferences(path)

        prefs.set_boolean("blocklist.Barracuda", True)
        prefs.set_boolean("blocklist.Spamcop", False)

        assert yaml.safe_load(path.read_text()) == {
            "blocklist.Barracuda": True,
            "blocklist.Spamcop": False,
        }

        reloaded = YamlPreferences(path)
        assert reloaded.get_boolean("blocklist.Barracuda") is True
        assert reloaded.get_boolean("blocklist.Spamcop") is False

    def test_remove(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        prefs = YamlPreferences(path)
        prefs.set_boolean("blocklist.Barracuda", True)

        prefs.remove("blocklist.Barracuda")

        assert YamlPreferences(path).get_boolean("blocklist.Barracuda") is None

    def test_failed_write_keeps_values(self, tmp_path):
        # Parent "directory" is a regular file, so every write fails
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        prefs = YamlPreferences(blocker / "prefs.yaml")

        with pytest.raises(OSError):
            prefs.set_boolean("blocklist.Barracuda", True)

        assert prefs.get_boolean("blocklist.Barracuda") is None

    def test_failed_remove_keeps_values(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        prefs = YamlPreferences(path)
        prefs.set_boolean("blocklist.Barracuda", True)

        path.unlink()
        path.mkdir()
        with pytest.raises(OSError):
            prefs.remove("blocklist.Barracuda")

        assert prefs.get_boolean("blocklist.Barracuda") is True

    def test_ignores_invalid_values(self, tmp_path, caplog):
        path = tmp_path / "prefs.yaml"
        path.write_text("blocklist.Spamcop: maybe\nblocklist.Barracuda: true\n")

        prefs = YamlPreferences(path)

        assert prefs.get_boolean("blocklist.Spamcop") is None
        assert prefs.get_boolean("blocklist.Barracuda") is True
        assert "Ignoring non-boolean preference" in caplog.text

    def test_ignores_non_mapping(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        path.write_text("- just\n- a list\n")

        assert YamlPreferences(path).get_boolean("just") is None
