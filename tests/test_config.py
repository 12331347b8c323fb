"""
Unit tests for Settings.
"""
import pytest

from rawprint.config import Settings


class TestSettings:
    """Defaults and environment overrides."""

    def test_defaults(self):
        settings = Settings()
        assert settings.default_port == 9100
        assert settings.connect_timeout == 5.0
        assert settings.effective_write_timeout == 5.0
        assert settings.job_name == "rawprint"

    def test_write_timeout_override(self):
        settings = Settings(write_timeout=2.5)
        assert settings.effective_write_timeout == 2.5

    def test_from_env(self):
        settings = Settings.from_env({
            "RAWPRINT_DEFAULT_PORT": "9101",
            "RAWPRINT_TIMEOUT": "1.5",
            "RAWPRINT_JOB_NAME": "ofp",
            "RAWPRINT_USB_QUERY_TIMEOUT": "3",
        })
        assert settings.default_port == 9101
        assert settings.connect_timeout == 1.5
        assert settings.effective_write_timeout == 1.5
        assert settings.job_name == "ofp"
        assert settings.usb_query_timeout == 3.0

    def test_from_env_ignores_blank(self):
        assert Settings.from_env({"RAWPRINT_TIMEOUT": "  "}) == Settings()

    def test_from_env_rejects_non_number(self):
        with pytest.raises(ValueError, match="RAWPRINT_TIMEOUT"):
            Settings.from_env({"RAWPRINT_TIMEOUT": "soon"})

    def test_from_env_rejects_out_of_range(self):
        with pytest.raises(ValueError, match="default_port"):
            Settings.from_env({"RAWPRINT_DEFAULT_PORT": "0"})

    @pytest.mark.parametrize("kwargs", [
        {"connect_timeout": 0},
        {"write_timeout": -1},
        {"usb_query_timeout": 0},
        {"job_name": " "},
        {"connect_timeout": float("nan")},
        {"connect_timeout": float("inf")},
        {"write_timeout": float("inf")},
        {"usb_query_timeout": float("nan")},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            Settings(**kwargs)

    @pytest.mark.parametrize("name, value", [
        ("RAWPRINT_TIMEOUT", "nan"),
        ("RAWPRINT_TIMEOUT", "inf"),
        ("RAWPRINT_USB_QUERY_TIMEOUT", "-inf"),
    ])
    def test_from_env_rejects_non_finite(self, name, value):
        with pytest.raises(ValueError, match=name):
            Settings.from_env({name: value})
