"""Player-facing notifications."""
import logging
from collections import deque
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Protocol

from logic_master.constants import NOTIFICATION_FEED_LIMIT

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Notifier(Protocol):
    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        ...


class NotificationFeed:
    """Logs notifications and keeps the most recent ones for display."""

    LOG_LEVELS = {
        Severity.INFO: logging.INFO,
        Severity.SUCCESS: logging.INFO,
        Severity.WARNING: logging.WARNING,
        Severity.ERROR: logging.WARNING,
    }

    def __init__(self, limit: int = NOTIFICATION_FEED_LIMIT):
        self._entries = deque(maxlen=limit)

    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        severity = Severity(severity)
        self._entries.append({
            "message": message,
            "severity": severity.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })
        logger.log(self.LOG_LEVELS[severity], f"[{severity.value}] {message}")

    def recent(self) -> List[Dict]:
        """Notifications, newest first."""
        return list(reversed(self._entries))
