# bionic_subtitles/service.py
"""
HTTP service for subtitle emphasis processing.
"""
import json
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple, Type
from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler
from loguru import logger

from .__about__ import __version__
from .config import ServiceConfig
from .core.exceptions import BionicError, InvalidFormat, InvalidMode
from .core.interfaces import EmphasisMode, Mode, ProcessOptions, SubtitleFormat
from .core.processor import SubtitleProcessor
from .limits import truncate_subtitles
from .nlp.classifier import NltkClassifier


class RateLimiter:
    """
    Fixed-window request counter keyed by client address.

    Args:
        max_requests: Requests allowed per window
        window_seconds: Window length
        clock: Time source in seconds
    """
    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._last_sweep = clock()
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        now = self.clock()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)
            start, count = self._windows.get(key, (now, 0))
            if now - start >= self.window_seconds:
                start, count = now, 0
            if count >= self.max_requests:
                self._windows[key] = (start, count)
                return False
            self._windows[key] = (start, count + 1)
            return True

    def _sweep(self, now: float) -> None:
        """Drop clients whose window has run out. Caller holds the lock."""
        expired = [
            key for key, (start, _) in self._windows.items()
            if now - start >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now


class ProcessingHandler(BaseHTTPRequestHandler):
    """Handles HTTP requests for subtitle processing."""

    config: ServiceConfig = ServiceConfig()
    processor: Optional[SubtitleProcessor] = None
    rate_limiter: Optional[RateLimiter] = None

    def do_OPTIONS(self) -> None:
        """Answer CORS preflight requests."""
        self.send_response(204)
        self._send_cors_headers()
        self.end_headers()

    def do_GET(self) -> None:
        """Serve the health check; any other path is a 404."""
        if self.path != "/health":
            self._send_json(404, {"error": "Not found"})
            return
        self._send_json(200, {"status": "ok", "version": __version__})

    def do_POST(self) -> None:
        """Handle POST requests with subtitle content."""
        if self.path != "/process":
            self._send_json(404, {"error": "Not found"})
            return

        try:
            content_length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            self._send_json(400, {"error": "Invalid Content-Length"})
            return
        if content_length > self.config.max_request_bytes:
            self._send_json(413, {"error": "Request too large"})
            return

        body = self.rfile.read(content_length)
        if self.rate_limiter and not self.rate_limiter.allow(self.client_address[0]):
            self._send_json(429, {"error": "Too many requests"})
            return

        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            self._send_json(400, {"error": "Invalid JSON body"})
            return
        if not isinstance(payload, dict):
            self._send_json(400, {"error": "Invalid JSON body"})
            return

        try:
            status, response = self._process(payload)
        except BionicError as e:
            status, response = 400, {"error": str(e)}
        except Exception as e:
            logger.error(f"Error processing request: {e}")
            status, response = 500, {"error": str(e)}
        self._send_json(status, response)

    def _process(self, payload: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
        text = payload.get("text")
        fmt = payload.get("format")
        mode = payload.get("mode")
        if not text or not fmt or not mode:
            return 400, {"error": "Missing required fields"}
        if not isinstance(text, str):
            return 400, {"error": "text must be a string"}
        if not isinstance(fmt, str) or fmt not in {f.value for f in SubtitleFormat}:
            raise InvalidFormat(fmt)
        if not isinstance(mode, str) or mode not in {m.value for m in Mode}:
            raise InvalidMode(mode)

        truncated = False
        lines_processed = None
        if not self.config.is_licensed(payload.get("licenseKey")):
            result = truncate_subtitles(text, fmt, self.config.free_tier_limit)
            text = result.text
            truncated = result.truncated
            lines_processed = result.lines_processed

        processed = self._get_processor().process(ProcessOptions(
            text=text,
            format=fmt,
            mode=mode,
            intensity=self.config.clamp_intensity(payload.get("intensity")),
            emphasis_mode=EmphasisMode.MARKUP
        ))

        return 200, {
            "processedText": processed.processed_text,
            "truncated": truncated,
            "linesProcessed": lines_processed,
        }

    def _get_processor(self) -> SubtitleProcessor:
        if self.processor is None:
            return SubtitleProcessor(NltkClassifier(download=self.config.download_tagger))
        return self.processor

    def _send_cors_headers(self) -> None:
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "GET, POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")

    def _send_json(self, status: int, response: Dict[str, Any]) -> None:
        body = json.dumps(response).encode()
        self.send_response(status)
        self.send_header("Content-type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self._send_cors_headers()
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:
        logger.debug(f"{self.address_string()} {format % args}")


def make_handler(
    config: ServiceConfig,
    processor: Optional[SubtitleProcessor] = None
) -> Type[ProcessingHandler]:
    """Create a handler class bound to a configuration."""
    return type("ConfiguredProcessingHandler", (ProcessingHandler,), {
        "config": config,
        "processor": processor,
        "rate_limiter": RateLimiter(
            config.rate_limit_requests,
            config.rate_limit_window_seconds
        ),
    })


def create_server(
    config: ServiceConfig,
    processor: Optional[SubtitleProcessor] = None
) -> ThreadingHTTPServer:
    return ThreadingHTTPServer((config.host, config.port), make_handler(config, processor))


def run_server(config: Optional[ServiceConfig] = None) -> None:
    """Run the processing service."""
    config = config or ServiceConfig.from_env()
    server = create_server(config)
    logger.info(f"Starting subtitle service on {config.host}:{config.port}")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down subtitle service")
        server.server_close()


if __name__ == "__main__":
    run_server()
