# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供隔离的环境变量、Flask 应用与测试客户端.
"""

import pytest
from flask import Flask

from param_checker import ParamChecker, Settings


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    避免开发者本机的 PARAM_CHECKER_* 环境变量影响测试稳定性.
    """
    for key in ("PARAM_CHECKER_METHODS", "PARAM_CHECKER_ERROR_STATUS_CODE", "PARAM_CHECKER_LOG_JSON"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PARAM_CHECKER_ENVIRONMENT", "testing")
    monkeypatch.setenv("PARAM_CHECKER_LOG_LEVEL", "WARNING")


@pytest.fixture
def app():
    """创建挂载了 ParamChecker 的最小 Flask 应用."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    ParamChecker(app, settings=Settings())
    return app


@pytest.fixture
def checker(app):
    return app.extensions["param_checker"]


@pytest.fixture
def client(app):
    return app.test_client()
