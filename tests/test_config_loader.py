"""Tests for the YAML connection options loader."""

import pytest

from redis_singleton.config_loader import load_connection_options
from redis_singleton.domain.exceptions import InvalidOptionsError


def _write(tmp_path, text):
    path = tmp_path / "redis.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConnectionOptions:
    """Test load_connection_options."""

    def test_section(self, tmp_path):
        """Test options under the redis section."""
        path = _write(
            tmp_path,
            "redis:\n  host: cache.internal\n  port: 6379\n  db: 0\nother: ignored\n",
        )

        assert load_connection_options(path) == {
            "host": "cache.internal",
            "port": 6379,
            "db": 0,
        }

    def test_custom_section(self, tmp_path):
        """Test a custom section name."""
        path = _write(tmp_path, "cache:\n  url: redis://cache:6379/1\n")

        assert load_connection_options(path, section="cache") == {
            "url": "redis://cache:6379/1"
        }

    def test_flat_mapping(self, tmp_path):
        """Test a flat mapping of options."""
        path = _write(tmp_path, "host: localhost\ndb: 3\n")

        assert load_connection_options(str(path)) == {"host": "localhost", "db": 3}

    def test_bare_url(self, tmp_path):
        """Test a file holding only a URL."""
        path = _write(tmp_path, "redis://localhost:6379/0\n")

        assert load_connection_options(path) == {"url": "redis://localhost:6379/0"}

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_connection_options(tmp_path / "absent.yaml")

    def test_empty_file(self, tmp_path):
        """Test an empty file is rejected."""
        path = _write(tmp_path, "")

        with pytest.raises(InvalidOptionsError, match="empty"):
            load_connection_options(path)

    def test_empty_section(self, tmp_path):
        """Test an empty section is rejected."""
        path = _write(tmp_path, "redis:\n")

        with pytest.raises(InvalidOptionsError, match="section 'redis' is empty"):
            load_connection_options(path)

    def test_malformed_yaml(self, tmp_path):
        """Test malformed YAML is rejected."""
        path = _write(tmp_path, "redis: [unclosed\n")

        with pytest.raises(InvalidOptionsError, match="Invalid YAML"):
            load_connection_options(path)

    def test_invalid_values(self, tmp_path):
        """Test validation errors surface from the loader."""
        path = _write(tmp_path, "redis:\n  port: 99999\n")

        with pytest.raises(InvalidOptionsError):
            load_connection_options(path)
