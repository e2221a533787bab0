"""Starlette app serving the Lambda resolver outside of API Gateway.

Each HTTP request is rewritten into an API Gateway REST proxy event and
resolved by the same ``APIGatewayRestResolver`` the Lambda function uses.
"""

import base64
from typing import Any
from uuid import uuid4

from aws_lambda_powertools import Logger
from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from . import handler

logger = Logger(child=True)

METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def build_event(request: Request) -> dict[str, Any]:
    """Translate a Starlette request into a REST proxy event."""
    body = await request.body()
    query = request.query_params
    path = request.url.path

    return {
        "resource": path,
        "path": path,
        "httpMethod": request.method,
        "headers": dict(request.headers),
        "multiValueHeaders": {
            name: request.headers.getlist(name) for name in request.headers.keys()
        },
        "queryStringParameters": dict(query) or None,
        "multiValueQueryStringParameters": {
            name: query.getlist(name) for name in query.keys()
        }
        or None,
        "pathParameters": None,
        "stageVariables": None,
        "requestContext": {
            "httpMethod": request.method,
            "path": path,
            "stage": "local",
            "requestId": uuid4().hex,
        },
        "body": body.decode("utf-8") if body else None,
        "isBase64Encoded": False,
    }


def to_response(result: dict[str, Any]) -> Response:
    """Turn a resolver result back into a Starlette response."""
    body = result.get("body") or ""
    if result.get("isBase64Encoded"):
        content = base64.b64decode(body)
    else:
        content = body.encode("utf-8")

    response = Response(content=content, status_code=result["statusCode"])
    for name, values in (result.get("multiValueHeaders") or {}).items():
        for value in values:
            response.headers.append(name, str(value))
    for name, value in (result.get("headers") or {}).items():
        response.headers[name] = str(value)
    return response


async def resolve(request: Request) -> Response:
    event = await build_event(request)
    # Store calls block, keep them off the event loop
    result = await run_in_threadpool(handler.app.resolve, event, {})

    logger.debug(
        "Local request served",
        extra={
            "method": event["httpMethod"],
            "path": event["path"],
            "status": result["statusCode"],
        },
    )
    return to_response(result)


app = Starlette(routes=[Route("/{path:path}", resolve, methods=METHODS)])
