from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Vai trò người dùng dùng cho phân quyền."""

    STUDENT = "student"
    PARENT = "parent"
    TEACHER = "teacher"
    MANAGER = "manager"


class EvaluationType(str, Enum):
    """Loại đánh giá chính của một bản ghi (không giới hạn trường điểm nào được khác 0)."""

    STUDY = "study"
    DISCIPLINE = "discipline"


class Resource(str, Enum):
    """Các tài nguyên chịu chung một ma trận phân quyền."""

    EVALUATION = "evaluation"
    CLASS = "class"
    PAYROLL = "payroll"
    TUITION = "tuition"
    SCHEDULE = "schedule"
    TEST = "test"
    TEACHER_REVIEW = "teacher_review"


class Operation(str, Enum):
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
