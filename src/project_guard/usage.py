"""Usage log: an append-only audit trail of tool calls.

The analysis core never depends on it. Callers inject a UsageLog into the
tool dispatcher; failures to write are logged and otherwise ignored.
"""

from __future__ import annotations

import datetime
import json
import os
from pathlib import Path
from typing import Any

from .logging import get_logger

logger = get_logger("usage")

DEFAULT_LOG_DIR = ".guard-logs"


class UsageLog:
    """Sink for usage events. The base class records nothing."""

    def record(self, action: str, **details: Any) -> None:
        pass


class JsonlUsageLog(UsageLog):
    """Appends one JSON object per event to a daily file in directory."""

    def __init__(self, directory: str | Path = DEFAULT_LOG_DIR):
        self.directory = Path(directory)

    def path_for(self, now: datetime.datetime) -> Path:
        return self.directory / f"usage-{now.date().isoformat()}.log"

    def record(self, action: str, **details: Any) -> None:
        now = datetime.datetime.now(datetime.timezone.utc)
        try:
            entry = {
                "timestamp": now.isoformat(),
                "action": action,
                "pid": os.getpid(),
                "cwd": os.getcwd(),
                **details,
            }
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(self.path_for(now), "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, default=str) + "\n")
        except OSError as e:
            logger.warning("Failed to write usage log: %s", e)
            return
        logger.debug("%s %s", action, json.dumps(details, default=str))
