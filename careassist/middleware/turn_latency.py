"""Turn latency middleware — logs chat request timings to JSONL."""

import json
import logging
import time
from pathlib import Path

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "turn_latency.jsonl"


class TurnLatencyMiddleware(BaseHTTPMiddleware):
    """Records elapsed time for /chat and /chat/stream requests.

    For streams this is time to first byte; the body keeps flowing after.
    """

    def __init__(self, app: ASGIApp, log_dir: str = "/app/logs") -> None:
        super().__init__(app)
        self.log_dir = Path(log_dir)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not request.url.path.startswith("/chat"):
            response: Response = await call_next(request)
            return response

        start = time.monotonic()
        response = await call_next(request)
        elapsed = time.monotonic() - start

        entry = {
            "timestamp": time.time(),
            "path": request.url.path,
            "method": request.method,
            "elapsed_seconds": round(elapsed, 3),
            "status_code": response.status_code,
        }
        self.write_entry(entry)
        return response

    def write_entry(self, entry: dict) -> None:
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            with open(self.log_dir / LOG_FILE_NAME, "a") as f:
                f.write(json.dumps(entry) + "\n")
        except OSError:
            logger.warning("Could not write turn latency entry")
