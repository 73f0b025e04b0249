"""参数校验示例应用.

执行方式:
    $ python examples/books/book_app.py
    $ curl -X POST localhost:5001/books -d name=Dune -d publish_date=1965-08-01

示例展示了:
1. 使用 ParamScope 声明必填/可选参数
2. 通过装饰器与 endpoint 登记两种方式挂载校验
3. 校验失败时的统一 JSON 错误响应
"""

from __future__ import annotations

import re
from datetime import date

from flask import Flask, jsonify

from param_checker import ParamChecker, ParamScope, current_params

app = Flask(__name__)
checker = ParamChecker(app)

book_params = (
    ParamScope()
    .required("name", type=str)
    .optional("author", type=str, default="unknown")
    .required("publish_date", type=date)
)

search_params = (
    ParamScope()
    .optional("isbn", type=str, regexp=re.compile(r"^\d{10}(\d{3})?\Z"))
    .optional("tags", type=list, delimiter=",")
    .optional("page", type=int, range=range(1, 101), default=1)
)


@app.route("/books", methods=["GET", "POST"])
@checker.params(book_params)
def create_book():
    params = current_params() or {}
    return jsonify(
        {
            "name": params.get("name"),
            "author": params.get("author"),
            "publish_date": params["publish_date"].isoformat() if params.get("publish_date") else None,
        },
    )


@app.get("/books/search")
def search_books():
    params = current_params() or {}
    return jsonify({"isbn": params.get("isbn"), "tags": params.get("tags", []), "page": params.get("page")})


checker.register("search_books", search_params, methods=["GET"])


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=5001)
