"""
Commands Layer Tests

Tests the doctor command functions used by the CLI.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from commands import doctor
from commands.base import CommandResult, ResultStatus
from core.doctor import CheckDescriptor
from core.doctor.checks import logged_in_user, resources
from core.errors import PreconditionError, ProcessError, SystemCheckError


def noop(context, task=None):
    pass


def failing(message):
    def task(context, task=None):
        raise SystemCheckError(message)
    return task


def make_collaborators():
    ui = MagicMock()
    system = MagicMock()
    system.environment = 'production'
    return ui, system


class TestCommandResult:
    """Test CommandResult base class."""

    def test_ok_result(self):
        """Test creating a successful result."""
        result = CommandResult.ok("Success", data={'key': 'value'})
        assert result.success is True
        assert result.status == ResultStatus.SUCCESS
        assert result.message == "Success"
        assert result.data == {'key': 'value'}
        assert bool(result) is True

    def test_fail_result(self):
        """Test creating a failed result."""
        error = SystemCheckError("Error details")
        result = CommandResult.fail("Failed", error=error)
        assert result.success is False
        assert result.status == ResultStatus.ERROR
        assert result.error is error
        assert bool(result) is False

    def test_warn_result(self):
        """Test creating a warning result."""
        result = CommandResult.warn("Warning", data={'partial': True})
        assert result.success is True  # Warnings are still "successful"
        assert result.status == ResultStatus.WARNING
        assert result.data.get('partial') is True


class TestBuildArgv:
    """Test build_argv."""

    def test_shape(self):
        argv = doctor.build_argv('doctor', ('start',), quiet=True, stack=False)
        assert argv == {'args': ['doctor'], 'categories': ['start'], 'quiet': True, 'stack': False}


class TestDoctorRun:
    """Test doctor.run (standalone doctor)."""

    def test_all_pass(self, tmp_path):
        """Test a clean run reports success."""
        ui, system = make_collaborators()
        checks = [CheckDescriptor('Fine', noop)]

        with patch('commands.doctor.CHECKS', checks):
            result = doctor.run(skip_instance_check=True, ui=ui, system=system, cwd=tmp_path)

        assert result.success is True
        assert result.data == {'environment': 'production'}
        ui.listr.assert_called_once()
        assert ui.listr.call_args[1]['exit_on_error'] is False

    def test_failures_collected(self, tmp_path):
        """Test every failing check is reported, first one first."""
        checks = [
            CheckDescriptor('First', failing('one')),
            CheckDescriptor('Second', noop),
            CheckDescriptor('Third', failing('three')),
        ]
        _, system = make_collaborators()
        ui = doctor.UI(console=MagicMock())

        with patch('commands.doctor.CHECKS', checks):
            result = doctor.run(skip_instance_check=True, ui=ui, system=system, cwd=tmp_path)

        assert result.success is False
        assert result.data['failed'] == ['First', 'Third']
        assert result.error.first.message == 'one'

    def test_precondition_propagates(self, tmp_path):
        """Test running outside an installation raises."""
        ui, system = make_collaborators()

        with patch('commands.doctor.CHECKS', [CheckDescriptor('Fine', noop)]):
            with pytest.raises(PreconditionError):
                doctor.run(ui=ui, system=system, cwd=tmp_path)

        ui.listr.assert_not_called()

    def test_flags_passed_through(self, tmp_path):
        ui, system = make_collaborators()
        seen = {}

        def capture(context, task=None):
            seen.update(context.argv)

        with patch('commands.doctor.CHECKS', [CheckDescriptor('Capture', capture)]):
            doctor.run(skip_instance_check=True, local=True, ui=doctor.UI(console=MagicMock()),
                       system=system, cwd=tmp_path, stack=False)

        assert seen['stack'] is False
        assert seen['local'] is True
        assert seen['args'] == ['doctor']


class TestPreflight:
    """Test doctor.preflight (checks embedded in another command)."""

    def test_unknown_category(self):
        result = doctor.preflight('deploy')
        assert result.success is False
        assert "Unknown category 'deploy'" in result.message

    def test_stops_at_first_failure(self, tmp_path):
        """Test embedded runs are blocking."""
        later = MagicMock()
        checks = [
            CheckDescriptor('First', failing('one'), category=['install']),
            CheckDescriptor('Later', later, category=['install']),
        ]
        _, system = make_collaborators()
        ui = doctor.UI(console=MagicMock())

        with patch('commands.doctor.CHECKS', checks):
            result = doctor.preflight('install', ui=ui, system=system, cwd=tmp_path)

        assert result.success is False
        assert result.data['failed'] == ['First']
        later.assert_not_called()

    def test_install_skips_instance(self, tmp_path):
        ui, system = make_collaborators()

        with patch('commands.doctor.CHECKS', [CheckDescriptor('Fine', noop, category=['install'])]):
            result = doctor.preflight('install', ui=ui, system=system, cwd=tmp_path)

        assert result.success is True
        system.get_instance.assert_not_called()
        assert ui.listr.call_args[1]['exit_on_error'] is True


class TestListChecks:
    """Test doctor.list_checks."""

    def test_all(self):
        result = doctor.list_checks()
        assert result.success is True
        titles = [c['title'] for c in result.data['checks']]
        assert 'Validating config' in titles
        assert 'Checking installation permissions' in titles

    def test_filtered(self):
        result = doctor.list_checks(['install'])
        for check in result.data['checks']:
            assert 'install' in check['category']

    def test_none_match(self):
        result = doctor.list_checks(['nothing'])
        assert result.status == ResultStatus.WARNING
        assert result.data['checks'] == []


class TestUnexpectedCheckFailures:
    """Test raw exceptions from checks during a doctor run."""

    def test_reported_and_run_continues(self, tmp_path):
        """Test a crashing check is reported and later checks still run."""
        _, system = make_collaborators()
        ui = doctor.UI(console=MagicMock())
        checks = [logged_in_user.check, resources.free_space_check]

        with patch('commands.doctor.CHECKS', checks), \
                patch('getpass.getuser', side_effect=OSError('No username set in the environment')), \
                patch('core.doctor.checks.resources.get_disk_space', return_value=50000) as mock_space:
            result = doctor.run(['update'], skip_instance_check=True, ui=ui, system=system, cwd=tmp_path)

        assert result.success is False
        assert result.data['failed'] == ['Checking logged in user']
        assert isinstance(result.error.first, ProcessError)
        mock_space.assert_called_once_with(tmp_path)


class TestInvalidInstallMessage:
    """Test the command named when the folder is not an installation."""

    def test_doctor(self, tmp_path):
        with pytest.raises(PreconditionError) as exc_info:
            doctor.run(['start'], ui=MagicMock(), system=MagicMock(), cwd=tmp_path)

        assert 'Run `sitekeeper doctor` again' in exc_info.value.message

    def test_preflight(self, tmp_path):
        with pytest.raises(PreconditionError) as exc_info:
            doctor.preflight('start', ui=MagicMock(), system=MagicMock(), cwd=tmp_path)

        assert 'Run `sitekeeper preflight` again' in exc_info.value.message
