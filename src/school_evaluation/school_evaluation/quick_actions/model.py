from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EvaluationType


@dataclass(frozen=True)
class QuickActionTemplate:
    """Mẫu đánh giá nhanh: điểm cộng/trừ + loại + nội dung dùng lại nhiều lần."""

    id: str
    name: str
    study_point: int = 0
    discipline_point: int = 0
    type: EvaluationType = EvaluationType.STUDY
    content: Optional[str] = None


DEFAULT_QUICK_ACTIONS: tuple[QuickActionTemplate, ...] = (
    QuickActionTemplate(
        id="phat-bieu",
        name="Phát biểu",
        study_point=2,
        discipline_point=0,
        type=EvaluationType.STUDY,
        content="Phát biểu xây dựng bài",
    ),
    QuickActionTemplate(
        id="phat-bieu-dung",
        name="Phát biểu đúng",
        study_point=3,
        discipline_point=0,
        type=EvaluationType.STUDY,
        content="Phát biểu tốt xây dựng bài",
    ),
    QuickActionTemplate(
        id="noi-tu-do",
        name="Nói tự do",
        study_point=0,
        discipline_point=-2,
        type=EvaluationType.DISCIPLINE,
        content="Nói tự do trong giờ học",
    ),
    QuickActionTemplate(
        id="noi-chuyen-rieng",
        name="Nói chuyện riêng",
        study_point=-1,
        discipline_point=-2,
        type=EvaluationType.DISCIPLINE,
        content="Nói tự do trong giờ học",
    ),
    QuickActionTemplate(
        id="ngu-trong-gio",
        name="Ngủ trong giờ",
        study_point=-2,
        discipline_point=-2,
        type=EvaluationType.DISCIPLINE,
        content="Ngủ gật trong giờ học",
    ),
)
