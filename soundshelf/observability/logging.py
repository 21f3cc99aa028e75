"""JSON log lines tagged with the request and the library object it targets."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from flask import g, has_app_context, has_request_context, request

HANDLER_NAME = "soundshelf-json"

# Route arguments worth surfacing on every line logged while serving them.
_ROUTE_FIELDS = ("track_id", "playlist_id")
CONTEXT_FIELDS = ("request_id", "method", "path") + _ROUTE_FIELDS


class RequestContextFilter(logging.Filter):
    """Copy request id, method, path and targeted track/playlist ids onto the record.

    Values passed explicitly through ``extra=`` are left alone.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        context: Dict[str, Any] = {}
        if has_app_context():
            context["request_id"] = g.get("request_id")
        if has_request_context():
            context["method"] = request.method
            context["path"] = request.path
            view_args = request.view_args or {}
            for field in _ROUTE_FIELDS:
                if field in view_args:
                    context[field] = view_args[field]
        for field in CONTEXT_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, context.get(field))
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_structured_logging(app) -> logging.Handler:
    """Install the stdout JSON handler on the root logger, or retune the one already there."""
    root = logging.getLogger()
    level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO

    handler = next((h for h in root.handlers if h.get_name() == HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(JsonFormatter())
        handler.addFilter(RequestContextFilter())
        root.addHandler(handler)
    handler.setLevel(level)
    return handler
