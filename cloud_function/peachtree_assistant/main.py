import json
import logging

import functions_framework

from . import config
from .errors import ClientInputError
from .handler import dispatch

logging.basicConfig(level=config.log_level(), format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong on the backend."


def cors_headers(request) -> dict:
    # Reflect the caller's origin
    origin = request.headers.get("Origin")
    headers = {"Access-Control-Allow-Origin": origin or "*"}
    if origin:
        headers["Vary"] = "Origin"
    return headers


def json_response(payload: dict, status: int, headers: dict):
    headers = {**headers, "Content-Type": "application/json"}
    return (json.dumps(payload, ensure_ascii=False), status, headers)


@functions_framework.http
def ask(request):
    headers = cors_headers(request)
    if request.method == "OPTIONS":
        preflight = {
            **headers,
            "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type, Authorization",
            "Access-Control-Max-Age": "3600",
        }
        return ("", 204, preflight)

    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}

    try:
        return json_response(dispatch(body), 200, headers)
    except ClientInputError as e:
        return json_response({"error": str(e)}, 400, headers)
    except Exception:
        logger.exception("An error occurred handling %s request", body.get("type"))
        return json_response({"error": GENERIC_ERROR}, 500, headers)
