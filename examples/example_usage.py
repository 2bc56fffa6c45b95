"""Ví dụ: dùng EvaluationBoard phía dashboard (không qua trình duyệt).

Client gọi REST API bằng httpx; cookie phiên lấy từ biến môi trường SESSION_COOKIE.
"""

import os

from config import load_settings

from src.school_evaluation.school_evaluation.access.identity import Identity, normalize_roles
from src.school_evaluation.school_evaluation.client.api import ApiClient
from src.school_evaluation.school_evaluation.client.board import EvaluationBoard
from src.school_evaluation.school_evaluation.client.store import HttpEvaluationStore
from src.school_evaluation.school_evaluation.core.logging_config import setup_logging


def main():
    settings = load_settings()
    setup_logging(settings.LOG_LEVEL)

    cookies = {"session": os.environ["SESSION_COOKIE"]} if os.getenv("SESSION_COOKIE") else None
    identity = Identity(user_id=int(os.getenv("USER_ID", "2")), roles=normalize_roles(os.getenv("ROLES", "teacher")))

    with ApiClient(settings.API_BASE_URL, timeout=settings.API_TIMEOUT, cookies=cookies) as api:
        board = EvaluationBoard(HttpEvaluationStore(api), identity=identity)
        board.refresh(limit=settings.DEFAULT_PAGE_LIMIT)
        for row in board.visible_rows():
            print(row)

        board.select(student_id=3, class_id=1)
        print(board.summary)


if __name__ == "__main__":
    main()
