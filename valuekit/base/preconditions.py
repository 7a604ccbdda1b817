from typing import Any, Optional, TypeVar

from valuekit.base.errors import (
    IllegalArgumentError,
    IllegalStateError,
    NullArgumentError
)


T = TypeVar('T')


PLACEHOLDER = '%s'


def format_message(template: Optional[str], *args: Any) -> str:
    """
    Substitutes each `%s` placeholder in `template` with the next argument.
    Arguments left over once the placeholders run out are appended in square braces.
    """
    template = str(template)
    parts = []
    template_start = 0
    arg_index = 0
    while arg_index < len(args):
        placeholder_start = template.find(PLACEHOLDER, template_start)
        if placeholder_start == -1:
            break
        parts.append(template[template_start:placeholder_start])
        parts.append(str(args[arg_index]))
        arg_index += 1
        template_start = placeholder_start + len(PLACEHOLDER)
    parts.append(template[template_start:])
    if arg_index < len(args):
        parts.append(' [')
        parts.append(', '.join(str(arg) for arg in args[arg_index:]))
        parts.append(']')
    return ''.join(parts)


def _get_error_message(
    error_message: Optional[Any],
    error_message_args: tuple
) -> Optional[str]:
    if error_message is None:
        return None
    if error_message_args:
        return format_message(str(error_message), *error_message_args)
    return str(error_message)


def check_argument(
    expression: Any,
    error_message: Optional[Any] = None,
    *error_message_args: Any
) -> None:
    if not expression:
        message = _get_error_message(error_message, error_message_args)
        raise IllegalArgumentError(message or 'Invalid argument.')


def check_state(
    expression: Any,
    error_message: Optional[Any] = None,
    *error_message_args: Any
) -> None:
    if not expression:
        message = _get_error_message(error_message, error_message_args)
        raise IllegalStateError(message or 'Invalid state.')


def check_not_null(
    reference: Optional[T],
    error_message: Optional[Any] = None,
    *error_message_args: Any
) -> T:
    if reference is None:
        message = _get_error_message(error_message, error_message_args)
        raise NullArgumentError(message or 'Unexpected None reference.')
    return reference


def _get_bad_element_index_message(index: int, size: int, desc: str) -> str:
    if index < 0:
        return format_message('%s (%s) must not be negative', desc, index)
    if size < 0:
        raise IllegalArgumentError(f'negative size: {size}')
    return format_message('%s (%s) must be less than size (%s)', desc, index, size)


def check_element_index(index: int, size: int, desc: str = 'index') -> int:
    if index < 0 or index >= size:
        raise IndexError(_get_bad_element_index_message(index, size, desc))
    return index


def _get_bad_position_index_message(index: int, size: int, desc: str) -> str:
    if index < 0:
        return format_message('%s (%s) must not be negative', desc, index)
    if size < 0:
        raise IllegalArgumentError(f'negative size: {size}')
    return format_message('%s (%s) must not be greater than size (%s)', desc, index, size)


def check_position_index(index: int, size: int, desc: str = 'index') -> int:
    if index < 0 or index > size:
        raise IndexError(_get_bad_position_index_message(index, size, desc))
    return index


def _get_bad_position_indexes_message(start: int, end: int, size: int) -> str:
    if start < 0 or start > size:
        return _get_bad_position_index_message(start, size, 'start index')
    if end < 0 or end > size:
        return _get_bad_position_index_message(end, size, 'end index')
    return format_message(
        'end index (%s) must not be less than start index (%s)', end, start
    )


def check_position_indexes(start: int, end: int, size: int) -> None:
    if start < 0 or end < start or end > size:
        raise IndexError(_get_bad_position_indexes_message(start, end, size))
