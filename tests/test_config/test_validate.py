"""Tests for environment validation functionality."""

import pytest
from unittest.mock import MagicMock, patch

from chainflow.config.validate import (
    check_environment,
    get_dependency_versions,
    print_environment_info
)


class TestEnvironmentChecking:
    """Test suite for environment validation functions."""
    
    def test_check_environment_success(self):
        check_environment()
        check_environment(min_numpy="1.20")
    
    def test_check_environment_numpy_too_old(self):
        with patch.dict('sys.modules', {'numpy': MagicMock(__version__="1.20.0")}):
            with pytest.raises(RuntimeError) as exc_info:
                check_environment(min_numpy="1.24")
        
        error_msg = str(exc_info.value)
        assert "NumPy 1.24+ required" in error_msg
        assert "found 1.20.0" in error_msg
        assert "pip install" in error_msg
    
    def test_get_dependency_versions(self):
        versions = get_dependency_versions()
        
        assert 'python' in versions
        assert versions['numpy'] != 'not installed'
        assert versions['tomli_w'] != 'not installed'
    
    def test_print_environment_info(self, capsys):
        print_environment_info()
        out = capsys.readouterr().out
        
        assert "Chainflow - Environment Information" in out
        assert "numpy" in out
