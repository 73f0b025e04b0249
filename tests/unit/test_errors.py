import pytest
from werkzeug.exceptions import NotFound

from param_checker.constants.system_constants import ErrorCategory, ErrorSeverity
from param_checker.errors import AppError, SchemaError, ValidationError, map_exception_to_status


@pytest.mark.unit
def test_schema_error_is_fatal_and_names_the_option() -> None:
    error = SchemaError("age", "age(Integer): :regexp can be used only with :type String", option="regexp")

    assert str(error) == "param_checker: age(Integer): :regexp can be used only with :type String"
    assert error.param == "age"
    assert error.option == "regexp"
    assert error.severity is ErrorSeverity.CRITICAL
    assert error.category is ErrorCategory.SYSTEM
    assert error.recoverable is False
    assert error.extra == {"param": "age", "option": "regexp"}


@pytest.mark.unit
def test_validation_error_is_recoverable_client_error() -> None:
    error = ValidationError("greater than 10", param="n", options={"type": int, "max": 10})

    assert str(error) == "n: greater than 10"
    assert error.status_code == 400
    assert error.category is ErrorCategory.VALIDATION
    assert error.recoverable is True
    assert error.message_key == "VALIDATION_ERROR"
    with pytest.raises(TypeError):
        error.options["max"] = 11  # type: ignore[index]


@pytest.mark.unit
def test_validation_error_without_param_renders_reason_only() -> None:
    assert str(ValidationError("field not found")) == "field not found"


@pytest.mark.unit
def test_app_error_defaults_message_from_key() -> None:
    error = AppError(message_key="VALIDATION_ERROR", status_code=409)

    assert error.message == "参数校验失败"
    assert error.status_code == 409


@pytest.mark.unit
def test_map_exception_to_status() -> None:
    assert map_exception_to_status(ValidationError("x")) == 400
    assert map_exception_to_status(NotFound()) == 404
    assert map_exception_to_status(RuntimeError("boom")) == 500
    assert map_exception_to_status(RuntimeError("boom"), default=503) == 503
