"""Tests for the exception hierarchy."""

import pytest

from preferable.domain.errors import (
    CoercionError,
    ConfigError,
    PreferenceError,
    StoreUnavailableError,
    UndeclaredPreferenceError,
)


class Settings:
    pass


class TestUndeclaredPreferenceError:
    def test_message_names_host(self) -> None:
        err = UndeclaredPreferenceError("colour", Settings)
        assert str(err) == "colour preference not defined on Settings"
        assert err.name == "colour"
        assert err.host_type is Settings

    def test_message_without_host(self) -> None:
        assert str(UndeclaredPreferenceError("colour")) == "colour preference not defined"

    def test_is_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            raise UndeclaredPreferenceError("colour")


@pytest.mark.parametrize(
    "exc_cls", [UndeclaredPreferenceError, CoercionError, StoreUnavailableError, ConfigError]
)
def test_all_derive_from_preference_error(exc_cls: type) -> None:
    assert issubclass(exc_cls, PreferenceError)


def test_coercion_error_is_value_error() -> None:
    err = CoercionError("bad", value=[1], type="hash")
    assert isinstance(err, ValueError)
    assert err.value == [1]
    assert err.type == "hash"
