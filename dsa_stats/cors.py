"""CORS hooks: permissive origin, fixed header allow-list, 200 pre-flight."""

from __future__ import annotations

from flask import Flask, Response, request

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def apply_cors_headers(response: Response) -> Response:
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


def install_cors(app: Flask) -> None:
    """Answer OPTIONS before routing and add CORS headers to every response."""

    @app.before_request
    def _handle_preflight():  # type: ignore[unused-ignore]
        if request.method == "OPTIONS":
            response = app.make_response(("", 200))
            response.headers.pop("Content-Type", None)
            return apply_cors_headers(response)
        return None

    @app.after_request
    def _add_cors(response: Response):  # type: ignore[unused-ignore]
        return apply_cors_headers(response)


__all__ = ["CORS_HEADERS", "apply_cors_headers", "install_cors"]
