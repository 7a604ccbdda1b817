from typing import Any, TypeVar

from valuekit.base.preconditions import check_not_null


T = TypeVar('T')


def identity(value: T) -> T:
    return value


def to_string_function(value: Any) -> str:
    return str(check_not_null(value))
