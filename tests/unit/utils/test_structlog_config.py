"""structlog 处理器链的单元测试."""

from __future__ import annotations

import pytest
import structlog
from flask import Flask

from param_checker import ParamChecker, ParamScope, Settings
from param_checker.settings import APP_VERSION
from param_checker.utils.structlog_config import StructlogConfig, get_logger, structlog_config


@pytest.fixture(autouse=True)
def _fresh_structlog():
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


@pytest.mark.unit
def test_configure_reads_level_and_renderer_from_app_config() -> None:
    app = Flask(__name__)
    app.config["PARAM_CHECKER_LOG_LEVEL"] = "debug"
    app.config["PARAM_CHECKER_LOG_JSON"] = True
    config = StructlogConfig()

    config.configure(app)

    assert config.level == "DEBUG"
    assert config.json_output is True
    assert config.configured is True


@pytest.mark.unit
def test_global_context_adds_component_and_version() -> None:
    event_dict = StructlogConfig._add_global_context(None, "info", {"event": "x"})  # type: ignore[arg-type]

    assert event_dict["component"] == "param_checker"
    assert event_dict["version"] == APP_VERSION


@pytest.mark.unit
def test_request_context_is_added_inside_requests() -> None:
    app = Flask(__name__)

    @app.post("/books")
    def create_book():
        return ""

    with app.test_request_context("/books", method="POST"):
        event_dict = StructlogConfig._add_request_context(None, "info", {})  # type: ignore[arg-type]

    assert event_dict == {"method": "POST", "path": "/books", "endpoint": "create_book"}
    assert StructlogConfig._add_request_context(None, "info", {}) == {}  # type: ignore[arg-type]


@pytest.mark.unit
def test_get_logger_emits_through_own_configuration(capsys, monkeypatch) -> None:
    monkeypatch.setattr(structlog_config, "json_output", False)

    get_logger("param_checker.schemas").warning("声明检查", param="n")

    output = capsys.readouterr().out
    assert "声明检查" in output
    assert "component=param_checker" in output
    assert structlog.is_configured() is True


@pytest.mark.unit
def test_host_structlog_configuration_is_left_alone() -> None:
    events: list[dict] = []

    def host_processor(_logger, _method_name, event_dict):  # type: ignore[no-untyped-def]
        events.append(dict(event_dict))
        return ""

    structlog.configure(processors=[host_processor])
    app = Flask(__name__)
    ParamChecker(app, settings=Settings())

    ParamScope().required("n", type=int)

    assert structlog.get_config()["processors"] == [host_processor]
    assert {"event": "注册参数声明", "param": "n", "mode": "required", "type": "Integer"} in events


@pytest.mark.unit
def test_init_app_reapplies_own_configuration() -> None:
    app = Flask(__name__)
    app.config["PARAM_CHECKER_LOG_JSON"] = True
    get_logger("param_checker.infra")

    ParamChecker(app, settings=Settings())

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)
