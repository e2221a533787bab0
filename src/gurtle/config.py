"""Runtime configuration for the leaderboard service."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

DEFAULT_PORT = 3000


def _parse_port(raw: str | None) -> int:
    """Parse a listen port, falling back to the default on bad input."""
    if raw is None:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        return DEFAULT_PORT
    if not 0 <= port <= 65535:
        return DEFAULT_PORT
    return port


class Settings(BaseModel):
    """Settings resolved once at startup and shared by reference."""

    table_name: str = "gurtle"
    collection: str = "scores"
    region: str = "us-east-1"
    endpoint_url: str | None = None
    host: str = "0.0.0.0"  # noqa: S104
    port: int = DEFAULT_PORT

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            table_name=env.get("LEADERBOARD_TABLE") or "gurtle",
            collection=env.get("LEADERBOARD_COLLECTION") or "scores",
            region=env.get("AWS_DEFAULT_REGION") or "us-east-1",
            endpoint_url=env.get("LEADERBOARD_ENDPOINT_URL") or None,
            host=env.get("HOST") or "0.0.0.0",  # noqa: S104
            port=_parse_port(env.get("PORT")),
        )
