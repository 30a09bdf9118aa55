"""
Tests for environment configuration.

Run: python3 -m pytest tests/test_env_config.py -v
"""

import os
import sys
from pathlib import Path
from unittest.mock import patch

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from utils.env_config import (
    DEFAULTS,
    get_config,
    get_config_bool,
    get_config_int,
    load_env_file,
    validate_config,
)


class TestGetConfig:
    """Tests for the get_config family."""

    def test_builtin_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_config('SITEKEEPER_SERVICE_USER') == DEFAULTS['SITEKEEPER_SERVICE_USER']

    def test_environment_wins(self):
        with patch.dict(os.environ, {'SITEKEEPER_SERVICE_USER': 'www-data'}):
            assert get_config('SITEKEEPER_SERVICE_USER') == 'www-data'

    def test_int(self):
        with patch.dict(os.environ, {'SITEKEEPER_CHECK_TIMEOUT': '15'}):
            assert get_config_int('SITEKEEPER_CHECK_TIMEOUT', 60) == 15
        with patch.dict(os.environ, {'SITEKEEPER_CHECK_TIMEOUT': 'soon'}):
            assert get_config_int('SITEKEEPER_CHECK_TIMEOUT', 60) == 60

    def test_bool(self):
        with patch.dict(os.environ, {'DEBUG_MODE': 'yes'}):
            assert get_config_bool('DEBUG_MODE') is True
        with patch.dict(os.environ, {'DEBUG_MODE': 'off'}):
            assert get_config_bool('DEBUG_MODE') is False


class TestLoadEnvFile:
    """Tests for load_env_file."""

    def test_loads_values(self, tmp_path):
        env_file = tmp_path / '.env'
        env_file.write_text('SITEKEEPER_TEST_VALUE=hello\n# comment\n')

        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop('SITEKEEPER_TEST_VALUE', None)
            loaded = load_env_file(env_file)
            assert os.environ['SITEKEEPER_TEST_VALUE'] == 'hello'

        assert loaded == {'SITEKEEPER_TEST_VALUE': 'hello'}

    def test_existing_environment_wins(self, tmp_path):
        env_file = tmp_path / '.env'
        env_file.write_text('SITEKEEPER_TEST_VALUE=from-file\n')

        with patch.dict(os.environ, {'SITEKEEPER_TEST_VALUE': 'from-env'}):
            loaded = load_env_file(env_file)
            assert os.environ['SITEKEEPER_TEST_VALUE'] == 'from-env'

        assert loaded == {}

    def test_missing_file(self, tmp_path):
        assert load_env_file(tmp_path / 'nope.env') == {}


class TestValidateConfig:
    """Tests for validate_config."""

    def test_defaults_valid(self, tmp_path):
        with patch.dict(os.environ, {'SITEKEEPER_LOG_PATH': str(tmp_path / 'sk.log')}, clear=True):
            results = validate_config()

        assert results['valid'] is True
        assert results['errors'] == []
        assert results['config']['environment'] == 'production'

    def test_bad_environment(self):
        with patch.dict(os.environ, {'SITEKEEPER_ENVIRONMENT': 'staging'}):
            results = validate_config()

        assert results['valid'] is False
        assert 'Invalid SITEKEEPER_ENVIRONMENT: staging' in results['errors']

    def test_non_numeric_threshold_warns(self):
        with patch.dict(os.environ, {'SITEKEEPER_MIN_MEMORY_MB': 'lots'}):
            results = validate_config()

        assert any('SITEKEEPER_MIN_MEMORY_MB' in w for w in results['warnings'])
        assert results['config']['sitekeeper_min_memory_mb'] == 150
