"""Lambda handler for the gurtle leaderboard."""

import re
from typing import Any

from aws_lambda_powertools import Logger
from aws_lambda_powertools.event_handler import (
    APIGatewayRestResolver,
    Response,
    content_types,
)
from aws_lambda_powertools.event_handler.exceptions import BadRequestError
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from .config import Settings
from .database import LeaderboardDatabase, StoreError
from .models import SCORE_MAX, SCORE_MIN, Duration, SubmittedEntry
from .service import LeaderboardService
from .validator import InvalidHashError

logger = Logger()
app = APIGatewayRestResolver()
settings = Settings.from_env()
service = LeaderboardService(LeaderboardDatabase(settings))

SCORE_PATTERN = re.compile(r"[+-]?[0-9]+")


def _text(status_code: int, body: str) -> Response:
    return Response(
        status_code=status_code, content_type=content_types.TEXT_PLAIN, body=body
    )


@app.exception_handler(StoreError)
def handle_store_error(ex: StoreError) -> Response:
    """Report store failures as server errors with the store's message."""
    logger.error("Database error", extra={"error": str(ex)})
    return _text(500, str(ex))


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return service.health_check()


@app.get("/scores/<duration>")
def get_scores(duration: str) -> list[dict[str, Any]]:
    """List the top ten scores of a time window."""
    window = Duration.parse(duration)
    logger.info("Scores request", extra={"duration": window.value})

    entries = service.get_scores(window)

    logger.info(
        "Scores retrieved successfully",
        extra={"duration": window.value, "entries_count": len(entries)},
    )
    return [entry.model_dump() for entry in entries]


@app.get("/position/<duration>/<score>")
def get_position(duration: str, score: str) -> dict[str, int]:
    """Rank position a score would take in a time window."""
    try:
        if not SCORE_PATTERN.fullmatch(score):
            raise ValueError()
        threshold = int(score)
        if threshold < SCORE_MIN or threshold > SCORE_MAX:
            raise ValueError()
    except ValueError as ve:
        raise BadRequestError(
            f"Invalid score: must be an integer between {SCORE_MIN} and {SCORE_MAX}"
        ) from ve

    window = Duration.parse(duration)
    logger.info(
        "Position request", extra={"duration": window.value, "score": threshold}
    )

    return service.get_position(window, threshold).model_dump()


@app.post("/submitscore")
def submit_score() -> Response:
    """Validate and store a submitted score."""
    try:
        submitted = SubmittedEntry.model_validate(app.current_event.json_body)
    except ValidationError as e:
        logger.warning("Invalid score submission", extra={"errors": e.errors()})
        raise BadRequestError(f"Invalid request: {e}") from e
    except (ValueError, TypeError) as e:
        logger.warning("Malformed score submission", extra={"error": str(e)})
        raise BadRequestError("Invalid request: body must be a JSON object") from e

    logger.info(
        "Score submission received",
        extra={"player": submitted.name, "score": submitted.score},
    )

    try:
        entry = service.submit_score(submitted)
    except InvalidHashError:
        logger.warning(
            "Score rejected",
            extra={"player": submitted.name, "score": submitted.score},
        )
        return _text(403, "Score rejected: Invalid hash")

    logger.info("Score submitted successfully", extra={"datetime": entry.datetime})
    return _text(200, "Score added")


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
def lambda_handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Lambda handler entry point."""
    return app.resolve(event, context)
