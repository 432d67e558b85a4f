"""Lightweight JSON logger utility for synth-time provisioning.

Provides a consistent logger adapter that emits structured logs with the
target environment and a deployment id when available.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

_EXTRA_FIELDS = ("route", "unit", "step", "method", "path", "count")


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        env = getattr(record, "environment", None) or os.environ.get("ENVIRONMENT")
        if env:
            payload["environment"] = env
        deployment_id = getattr(record, "deployment_id", None)
        if deployment_id:
            payload["deployment_id"] = deployment_id
        for name in _EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value
        if not hasattr(record, "asctime"):
            payload["timestamp"] = record.created
        return json.dumps(payload, ensure_ascii=False)


class _Adapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: Dict[str, Any]):  # type: ignore[override]
        extra = self.extra.copy() if isinstance(self.extra, dict) else {}
        if "extra" in kwargs and isinstance(kwargs["extra"], dict):
            extra.update(kwargs["extra"])  # merge per-call extras
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger(
    name: str,
    deployment_id: Optional[str] = None,
    environment: Optional[str] = None,
) -> logging.LoggerAdapter:
    """Return a JSON-formatted logger adapter with optional deployment id."""
    base = logging.getLogger(name)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
        base.addHandler(handler)
    level_name = str(os.environ.get("LOG_LEVEL", "INFO")).upper()
    base.setLevel(getattr(logging, level_name, logging.INFO))
    extras: Dict[str, Any] = {"environment": environment or os.environ.get("ENVIRONMENT")}
    if deployment_id:
        extras["deployment_id"] = deployment_id
    return _Adapter(base, extras)
