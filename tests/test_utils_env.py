"""Tests for the environment variable utility."""

import os

import pytest

from kubebench.utils.env import EnvVarTypeError, get_env


def test_get_env_basic():
    """Test getting set variables and missing variables with defaults."""
    os.environ["KUBEBENCH_TEST_VAR"] = "test_value"
    assert get_env("KUBEBENCH_TEST_VAR") == "test_value"
    assert get_env("KUBEBENCH_MISSING_VAR", default="default") == "default"
    assert get_env("KUBEBENCH_MISSING_VAR") is None
    del os.environ["KUBEBENCH_TEST_VAR"]


def test_get_env_coercion():
    """Test type coercion for common types."""
    os.environ["KUBEBENCH_BOOL_TRUE"] = "true"
    os.environ["KUBEBENCH_BOOL_FALSE"] = "0"
    os.environ["KUBEBENCH_INT"] = " 123"
    os.environ["KUBEBENCH_FLOAT"] = "1.23"
    os.environ["KUBEBENCH_LIST"] = "a, b, c "

    assert get_env("KUBEBENCH_BOOL_TRUE", default=False, as_type=bool) is True
    assert get_env("KUBEBENCH_BOOL_FALSE", default=True, as_type=bool) is False
    assert get_env("KUBEBENCH_INT", default=0, as_type=int) == 123
    assert get_env("KUBEBENCH_FLOAT", default=0.0, as_type=float) == 1.23
    assert get_env("KUBEBENCH_LIST", default=[], as_type=list) == ["a", "b", "c"]

    # Test coercion failure
    os.environ["KUBEBENCH_INVALID_INT"] = "not_an_int"
    with pytest.raises(EnvVarTypeError) as exc_info:
        get_env("KUBEBENCH_INVALID_INT", default=0, as_type=int)
    assert exc_info.value.name == "KUBEBENCH_INVALID_INT"
    assert exc_info.value.expected_type is int

    # Cleanup
    for var in [
        "KUBEBENCH_BOOL_TRUE",
        "KUBEBENCH_BOOL_FALSE",
        "KUBEBENCH_INT",
        "KUBEBENCH_FLOAT",
        "KUBEBENCH_LIST",
        "KUBEBENCH_INVALID_INT",
    ]:
        if var in os.environ:
            del os.environ[var]


def test_get_env_default_not_coerced(monkeypatch):
    """Test that the default is returned as given when the variable is unset."""
    monkeypatch.delenv("KUBEBENCH_UNSET_INT", raising=False)
    assert get_env("KUBEBENCH_UNSET_INT", default=7, as_type=int) == 7
