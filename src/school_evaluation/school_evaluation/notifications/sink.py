from __future__ import annotations

import logging
from typing import Protocol


class NotificationSink(Protocol):
    """Nơi hiển thị thông báo thành công / lỗi cho người dùng."""

    def success(self, message: str) -> None:
        raise NotImplementedError

    def error(self, message: str) -> None:
        raise NotImplementedError


class LoggingNotificationSink(NotificationSink):
    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger("school_evaluation.notifications")

    def success(self, message: str) -> None:
        self._logger.info(message)

    def error(self, message: str) -> None:
        self._logger.error(message)
