from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department


class DepartmentRepository(Protocol):
    def get(self, department_id: str) -> Optional[Department]:
        raise NotImplementedError

    def find_by_name(self, name: str) -> Optional[Department]:
        """Case-insensitive exact match, active or not."""

        raise NotImplementedError

    def dept_id_exists(self, dept_id: str) -> bool:
        raise NotImplementedError

    def list_active(self) -> Sequence[Department]:
        """Active departments sorted by name."""

        raise NotImplementedError

    def insert(self, department: Department) -> Department:
        raise NotImplementedError

    def save(self, department: Department) -> Department:
        raise NotImplementedError
