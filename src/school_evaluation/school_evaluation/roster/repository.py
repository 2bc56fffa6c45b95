from __future__ import annotations

from typing import Protocol, Sequence


class RosterProvider(Protocol):
    """Giao diện tra cứu danh sách lớp (lớp - giáo viên - học sinh - phụ huynh).

    Lưu ý (DIP): service chỉ phụ thuộc interface này; dữ liệu lớp do module khác quản lý.
    """

    def class_has_student(self, *, class_id: int, student_id: int) -> bool:
        raise NotImplementedError

    def teacher_teaches_class(self, *, teacher_id: int, class_id: int) -> bool:
        raise NotImplementedError

    def children_of(self, *, parent_id: int) -> Sequence[int]:
        raise NotImplementedError
