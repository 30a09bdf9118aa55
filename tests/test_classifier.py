"""
Tests for failure classification at subprocess boundaries.

Run: python3 -m pytest tests/test_classifier.py -v
"""

import subprocess
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.doctor import classify_failures, classify_process_failure, describe_offenders
from core.errors import ConfigError, ProcessError, SystemCheckError

TASK = SimpleNamespace(title='Some check')


class TestClassifyProcessFailure:
    """Tests for classify_process_failure."""

    def test_system_error_passes_through(self):
        """Test known errors are returned unchanged."""
        error = SystemCheckError('known problem')
        assert classify_process_failure(error, TASK, 'denied') is error

    def test_config_error_passes_through(self):
        """Test ConfigError counts as a known error."""
        error = ConfigError('bad', environment='production')
        assert classify_process_failure(error, TASK) is error

    @pytest.mark.parametrize('stderr', [
        'find: ./x: Permission denied',
        'PERMISSION DENIED',
        b'find: ./x: permission denied',
    ])
    def test_permission_denied(self, stderr):
        """Test permission problems map to the denied message."""
        error = subprocess.CalledProcessError(1, 'find', stderr=stderr)

        result = classify_process_failure(error, TASK, 'Fix your folders.')

        assert type(result) is SystemCheckError
        assert result.message == 'Fix your folders.'
        assert result.task is TASK
        assert result.options['err'] is error

    def test_permission_denied_without_message(self):
        """Test without a denied message everything is unexpected."""
        error = subprocess.CalledProcessError(1, 'find', stderr='Permission denied')
        assert isinstance(classify_process_failure(error, TASK), ProcessError)

    def test_other_failures(self):
        """Test everything else is a ProcessError tagged with the task."""
        error = subprocess.CalledProcessError(3, 'find', output='out', stderr='boom')

        result = classify_process_failure(error, TASK, 'Fix your folders.')

        assert isinstance(result, ProcessError)
        assert result.original is error
        assert result.task is TASK
        assert result.stdout == 'out'

    def test_non_process_exception(self):
        """Test OS errors without output are wrapped too."""
        error = FileNotFoundError('find: not found')

        result = classify_process_failure(error, TASK)

        assert isinstance(result, ProcessError)
        assert result.exit_code is None
        assert 'find: not found' in result.message


class TestClassifyFailures:
    """Tests for the classify_failures context manager."""

    def test_no_error(self):
        """Test a clean block is untouched."""
        with classify_failures(TASK):
            value = 1
        assert value == 1

    def test_reraises_system_error_unchanged(self):
        """Test errors raised inside a check step are not re-wrapped."""
        error = SystemCheckError('inner')

        with pytest.raises(SystemCheckError) as exc_info:
            with classify_failures(TASK, 'denied'):
                raise error

        assert exc_info.value is error
        assert exc_info.value.__cause__ is None

    def test_wraps_and_chains(self):
        """Test raw failures are classified and chained."""
        error = subprocess.CalledProcessError(1, 'find', stderr='nope')

        with pytest.raises(ProcessError) as exc_info:
            with classify_failures(TASK):
                raise error

        assert exc_info.value.__cause__ is error


class TestDescribeOffenders:
    """Tests for describe_offenders."""

    def test_singular(self):
        message = describe_offenders(['./a'], 'with incorrect permissions', 'Run fix.')
        assert message == (
            'Your installation folder contains a directory or file with incorrect permissions:\n'
            '- ./a\n'
            'Run fix.'
        )

    def test_plural(self):
        message = describe_offenders(['./a', './b'], 'with incorrect permissions', 'Run fix.')
        assert message.startswith('Your installation folder contains some directories or files')
        assert message.split('\n')[1:3] == ['- ./a', '- ./b']
        assert message.endswith('Run fix.')
