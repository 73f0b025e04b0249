import pytest

from param_checker.settings import Settings


@pytest.mark.unit
def test_settings_defaults() -> None:
    settings = Settings.load()

    assert settings.environment == "testing"
    assert settings.methods == ("POST",)
    assert settings.error_status_code == 400
    assert settings.log_level == "WARNING"
    assert settings.log_json is False
    assert settings.is_production is False


@pytest.mark.unit
def test_settings_methods_accept_csv(monkeypatch) -> None:
    monkeypatch.setenv("PARAM_CHECKER_METHODS", "get, post,")

    settings = Settings.load()

    assert settings.methods == ("GET", "POST")


@pytest.mark.unit
def test_settings_methods_accept_json_array(monkeypatch) -> None:
    monkeypatch.setenv("PARAM_CHECKER_METHODS", '["put", "patch"]')

    settings = Settings.load()

    assert settings.methods == ("PUT", "PATCH")


@pytest.mark.unit
def test_settings_rejects_unknown_methods(monkeypatch) -> None:
    monkeypatch.setenv("PARAM_CHECKER_METHODS", "POST,FETCH")

    with pytest.raises(ValueError, match="PARAM_CHECKER_METHODS 包含非法方法: FETCH"):
        Settings.load()


@pytest.mark.unit
@pytest.mark.parametrize("status_code", ["200", "500"])
def test_settings_error_status_code_must_be_client_error(monkeypatch, status_code) -> None:
    monkeypatch.setenv("PARAM_CHECKER_ERROR_STATUS_CODE", status_code)

    with pytest.raises(ValueError, match="必须为 4xx 状态码"):
        Settings.load()


@pytest.mark.unit
def test_settings_rejects_unknown_log_level(monkeypatch) -> None:
    monkeypatch.setenv("PARAM_CHECKER_LOG_LEVEL", "verbose")

    with pytest.raises(ValueError, match="PARAM_CHECKER_LOG_LEVEL"):
        Settings.load()


@pytest.mark.unit
def test_settings_to_flask_config(monkeypatch) -> None:
    monkeypatch.setenv("PARAM_CHECKER_ENVIRONMENT", "production")
    monkeypatch.setenv("PARAM_CHECKER_ERROR_STATUS_CODE", "422")
    monkeypatch.setenv("PARAM_CHECKER_LOG_JSON", "true")

    settings = Settings.load()

    assert settings.is_production is True
    assert settings.to_flask_config() == {
        "PARAM_CHECKER_METHODS": ("POST",),
        "PARAM_CHECKER_ERROR_STATUS_CODE": 422,
        "PARAM_CHECKER_LOG_LEVEL": "WARNING",
        "PARAM_CHECKER_LOG_JSON": True,
    }
