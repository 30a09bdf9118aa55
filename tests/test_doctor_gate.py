"""
Tests for the instance gate and run context builder.

Run: python3 -m pytest tests/test_doctor_gate.py -v
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.doctor import build_context, is_doctor_invocation, resolve_instance, should_resolve_instance


class TestShouldResolveInstance:
    """Tests for the gate's skip rules."""

    @pytest.mark.parametrize('argv', [
        {},
        {'categories': []},
        {'categories': ['start']},
        {'categories': ['install', 'start']},
        {'categories': ['start', 'install']},
        {'skip_instance_check': False},
    ])
    def test_resolves(self, argv):
        """Test combinations that need an instance."""
        assert should_resolve_instance(argv) is True

    @pytest.mark.parametrize('argv', [
        {'skip_instance_check': True},
        {'categories': ['install']},
        {'skip_instance_check': True, 'categories': ['start']},
    ])
    def test_skips(self, argv):
        """Test combinations that must not touch an instance."""
        assert should_resolve_instance(argv) is False


class TestResolveInstance:
    """Tests for resolve_instance."""

    @patch('core.doctor.gate.check_valid_install')
    def test_resolves_once(self, check_valid, tmp_path):
        """Test the install is validated, resolved and environment-checked once."""
        system = MagicMock()

        instance = resolve_instance({}, system, tmp_path)

        assert instance is system.get_instance.return_value
        check_valid.assert_called_once_with('doctor', tmp_path)
        system.get_instance.assert_called_once_with(tmp_path)
        instance.check_environment.assert_called_once_with()

    @patch('core.doctor.gate.check_valid_install')
    def test_custom_command_name(self, check_valid, tmp_path):
        """Test the invoking command is named in validity errors."""
        resolve_instance({}, MagicMock(), tmp_path, command_name='start')
        check_valid.assert_called_once_with('start', tmp_path)

    @patch('core.doctor.gate.check_valid_install')
    def test_skipped(self, check_valid, tmp_path):
        """Test a skipped gate returns None without side effects."""
        system = MagicMock()

        assert resolve_instance({'categories': ['install']}, system, tmp_path) is None
        check_valid.assert_not_called()
        system.get_instance.assert_not_called()


class TestBuildContext:
    """Tests for the run context builder."""

    def test_defaults(self, tmp_path):
        """Test flags default to False and argv is passed through."""
        argv = {'custom': 1}
        system, ui = MagicMock(), MagicMock()

        context = build_context(argv, system, ui, cwd=tmp_path)

        assert context.argv is argv
        assert context.system is system
        assert context.ui is ui
        assert context.instance is None
        assert context.local is False
        assert context.is_doctor_command is False
        assert context.cwd == tmp_path

    def test_local_and_instance(self, tmp_path):
        """Test local flag and instance are carried over."""
        instance = MagicMock()
        context = build_context({'local': True}, None, None, instance=instance, cwd=str(tmp_path))

        assert context.local is True
        assert context.instance is instance
        assert context.cwd == tmp_path

    def test_cwd_defaults_to_process_cwd(self):
        """Test the process cwd is used when none is given."""
        assert build_context({}, None, None).cwd == Path.cwd()

    @pytest.mark.parametrize('args,expected', [
        (['doctor'], True),
        (['doctor', 'start'], True),
        (['start'], False),
        (['start', 'doctor'], False),
        ([], False),
        (None, False),
    ])
    def test_doctor_invocation(self, args, expected):
        """Test only a leading doctor token marks a doctor run."""
        argv = {} if args is None else {'args': args}
        assert is_doctor_invocation(argv) is expected
        assert build_context(argv, None, None).is_doctor_command is expected
