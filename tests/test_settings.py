"""Tests for YAML-backed settings."""

import logging

import pytest

from robot_math.config import LoggingSettings, MathSettings, RankSettings, RiccatiSettings


class TestDefaults:
    def test_dataclass_defaults(self):
        settings = MathSettings()

        assert settings.riccati.tolerance == 1e-10
        assert settings.riccati.max_iterations == 100
        assert settings.rank.tolerance == 1e-10
        assert settings.logging.level == "INFO"

    def test_packaged_default_profile(self):
        settings = MathSettings.load()

        assert settings == MathSettings()

    def test_unknown_profile(self):
        with pytest.raises(FileNotFoundError):
            MathSettings.load("does_not_exist")


class TestFromDict:
    def test_partial_sections(self):
        settings = MathSettings.from_dict({"riccati": {"max_iterations": 20}})

        assert settings.riccati.max_iterations == 20
        assert settings.riccati.tolerance == 1e-10
        assert settings.rank == RankSettings()

    def test_unknown_keys_ignored(self):
        settings = MathSettings.from_dict(
            {"rank": {"tolerance": 1e-8, "method": "svd"}, "extra": {"a": 1}}
        )
        assert settings.rank.tolerance == 1e-8

    def test_none(self):
        assert MathSettings.from_dict(None) == MathSettings()

    def test_string_numbers_coerced(self):
        settings = MathSettings.from_dict({"riccati": {"tolerance": "1e-12", "max_iterations": "50"}})

        assert settings.riccati.tolerance == 1e-12
        assert settings.riccati.max_iterations == 50


class TestValidation:
    @pytest.mark.parametrize("kwargs", [{"tolerance": 0.0}, {"tolerance": -1.0}, {"max_iterations": 0}])
    def test_riccati(self, kwargs):
        with pytest.raises(ValueError):
            RiccatiSettings(**kwargs)

    def test_rank(self):
        with pytest.raises(ValueError):
            RankSettings(tolerance=0.0)

    def test_level_names(self):
        assert LoggingSettings(level="debug").level_no == logging.DEBUG
        assert LoggingSettings(level="WARNING").level_no == logging.WARNING

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            LoggingSettings(level="chatty").level_no


class TestFromFile:
    def test_yaml_file(self, tmp_path):
        path = tmp_path / "profile.yaml"
        path.write_text(
            "riccati:\n"
            "  tolerance: 1.0e-9\n"
            "  max_iterations: 40\n"
            "logging:\n"
            "  level: DEBUG\n"
            "  console: true\n"
        )

        settings = MathSettings.from_file(path)

        assert settings.riccati.tolerance == 1e-9
        assert settings.riccati.max_iterations == 40
        assert settings.logging.level_no == logging.DEBUG
        assert settings.logging.console is True

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert MathSettings.from_file(path) == MathSettings()
