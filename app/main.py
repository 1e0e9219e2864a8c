from __future__ import annotations

from flask import Flask, Response, jsonify, request

from app.ratchakitcha import config
from app.ratchakitcha.auth import require_bearer_token
from app.ratchakitcha.errors import SearchError
from app.ratchakitcha.healthcheck import run_health_checks
from app.ratchakitcha.logging_utils import _crawl_event
from app.ratchakitcha.models import (
    SearchRequest,
    parse_advanced_query,
    parse_category_query,
)
from app.ratchakitcha.search import build_payload, not_found_payload, run_search

app = Flask(__name__)
app.json.ensure_ascii = False
# The bearer secret is resolved once here; the auth guard reads it from app.config.
app.config["API_TOKEN"] = config.API_TOKEN


@app.errorhandler(SearchError)
def handle_search_error(exc: SearchError) -> Response:
    _crawl_event(
        "error",
        phase="api",
        path=request.path,
        error=exc.error_code,
        status=exc.http_status,
        detail=exc.detail,
    )
    return jsonify(exc.to_payload()), exc.http_status


def _search_response(search_request: SearchRequest) -> Response:
    _crawl_event(
        "api",
        path=request.path,
        layout=search_request.layout,
        remote_addr=request.remote_addr,
    )
    result = run_search(search_request)
    if not result.found:
        return jsonify(not_found_payload()), 404
    return jsonify(build_payload(result, search_request))


@app.get("/api/search")
@require_bearer_token
def category_search() -> Response:
    """Search by document category (1-5) with optional date range."""

    return _search_response(parse_category_query(request.args))


@app.get("/api/search1")
@require_bearer_token
def advanced_search() -> Response:
    """Search by title, document type, book/session numbers and dates."""

    return _search_response(parse_advanced_query(request.args))


@app.get("/api/health")
def api_health() -> Response:
    result = run_health_checks(entrypoint="web")
    status = 200 if result.ok else 503
    return jsonify({"ok": result.ok, "checks": result.checks}), status
