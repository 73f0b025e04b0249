import io

import pytest
from flask import Flask, request
from werkzeug.datastructures import FileStorage

from param_checker.utils.request_payload import build_raw_input


@pytest.fixture
def flask_app() -> Flask:
    app = Flask(__name__)
    app.config["TESTING"] = True
    return app


@pytest.mark.unit
def test_build_raw_input_takes_last_value_of_multidict(flask_app) -> None:
    with flask_app.test_request_context("/?tag=a&tag=b"):
        assert build_raw_input(request) == {"tag": "b"}


@pytest.mark.unit
def test_build_raw_input_merge_order(flask_app) -> None:
    flask_app.add_url_rule("/books/<name>", "show", lambda name: name, methods=["POST"])
    with flask_app.test_request_context("/books/path?name=query&page=1", method="POST", data={"name": "form"}):
        assert request.view_args == {"name": "path"}
        raw = build_raw_input(request)

    assert raw == {"name": "form", "page": "1"}


@pytest.mark.unit
def test_build_raw_input_json_body_overrides_query(flask_app) -> None:
    body = {"name": "json", "tags": ["a\x00", "b"], "meta": {"k": "v"}, "count": 3}
    with flask_app.test_request_context("/?name=query", method="POST", json=body):
        raw = build_raw_input(request)

    assert raw == {"name": "json", "tags": ["a", "b"], "meta": {"k": "v"}, "count": 3}


@pytest.mark.unit
def test_build_raw_input_ignores_non_object_json(flask_app) -> None:
    with flask_app.test_request_context("/?name=query", method="POST", json=["a", "b"]):
        assert build_raw_input(request) == {"name": "query"}


@pytest.mark.unit
def test_build_raw_input_tolerates_malformed_json(flask_app) -> None:
    with flask_app.test_request_context(
        "/?name=query",
        method="POST",
        data="{not json",
        content_type="application/json",
    ):
        assert build_raw_input(request) == {"name": "query"}


@pytest.mark.unit
def test_build_raw_input_strips_nul_characters(flask_app) -> None:
    with flask_app.test_request_context("/", method="POST", data={"name": "Du\x00ne"}):
        assert build_raw_input(request) == {"name": "Dune"}


@pytest.mark.unit
def test_build_raw_input_puts_uploads_last(flask_app) -> None:
    data = {"cover": (io.BytesIO(b"img"), "cover.png")}
    with flask_app.test_request_context("/?cover=text", method="POST", data=data, content_type="multipart/form-data"):
        raw = build_raw_input(request)

    assert isinstance(raw["cover"], FileStorage)
    assert raw["cover"].filename == "cover.png"


@pytest.mark.unit
def test_build_raw_input_returns_fresh_dict(flask_app) -> None:
    with flask_app.test_request_context("/?a=1"):
        first = build_raw_input(request)
        first["a"] = 1
        assert build_raw_input(request) == {"a": "1"}


@pytest.mark.unit
def test_build_raw_input_skips_file_parts_without_filename(flask_app) -> None:
    data = {"cover": (io.BytesIO(b""), ""), "name": "Dune"}
    with flask_app.test_request_context("/", method="POST", data=data, content_type="multipart/form-data"):
        assert build_raw_input(request) == {"name": "Dune"}
