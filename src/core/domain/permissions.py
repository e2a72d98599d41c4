"""Permission families and set checks.

两套封闭的权限枚举：
- StaffPermission: 平台级 staff 权限（存放于用户记录与 token claims）
- AppStaffPermission: 应用级 staff 权限（存放于 application staff grant）

线上格式统一为 PascalCase 字符串，未知字符串解析时直接报错，不做静默忽略。
"""

from collections.abc import Iterable
from enum import StrEnum
from typing import TypeVar

P = TypeVar("P", bound=StrEnum)


class StaffPermission(StrEnum):
    """Platform staff permissions."""

    CREATE_APPLICATION = "CreateApplication"
    CREATE_STAFF_USER = "CreateStaffUser"
    DELETE_STAFF_USER = "DeleteStaffUser"
    UPDATE_STAFF_USER = "UpdateStaffUser"
    DELETE_USER = "DeleteUser"


class AppStaffPermission(StrEnum):
    """Application staff permissions."""

    UPDATE_APPLICATION = "UpdateApplication"
    READ_APPLICATION = "ReadApplication"
    DELETE_APPLICATION = "DeleteApplication"
    CREATE_KEY = "CreateKey"
    READ_KEY = "ReadKey"
    READ_KEY_DETAIL = "ReadKeyDetail"
    UPDATE_KEY = "UpdateKey"
    DELETE_KEY = "DeleteKey"

    @classmethod
    def get_all(cls) -> list["AppStaffPermission"]:
        return list(cls)


class UnknownPermissionError(ValueError):
    """Raised when a permission string is not part of its family."""

    def __init__(self, family: type[StrEnum], value: str):
        self.family = family
        self.value = value
        super().__init__(f"Unknown {family.__name__}: '{value}'")


def parse_permissions(family: type[P], values: Iterable[str]) -> frozenset[P]:
    """Decode wire strings into a permission set, rejecting unknown values."""
    parsed: set[P] = set()
    for value in values:
        try:
            parsed.add(family(value))
        except ValueError as e:
            raise UnknownPermissionError(family, value) from e
    return frozenset(parsed)


def has_all(required: Iterable[StrEnum], held: Iterable[StrEnum]) -> bool:
    """True when every required permission is held (vacuously true when empty)."""
    return set(required).issubset(set(held))


def has_any(required: Iterable[StrEnum], held: Iterable[StrEnum]) -> bool:
    """True when any required permission is held (vacuously true when empty)."""
    required_set = set(required)
    if not required_set:
        return True
    return not required_set.isdisjoint(set(held))


def satisfies(
    held: Iterable[StrEnum],
    *,
    all_of: Iterable[StrEnum] = (),
    any_of: Iterable[StrEnum] = (),
) -> bool:
    """Evaluate an ``all_of`` / ``any_of`` requirement against a held set."""
    held_set = frozenset(held)
    return has_all(all_of, held_set) and has_any(any_of, held_set)
