from typing import (
    Any,
    Callable,
    FrozenSet,
    Generic,
    Iterable,
    Iterator,
    Optional,
    TypeVar,
    cast
)

from valuekit.base.errors import IllegalStateError
from valuekit.base.preconditions import check_not_null
from valuekit.base.suppliers import Supplier


T = TypeVar('T')
R = TypeVar('R')


ABSENT_HASH_CODE = 0x598df91c


class _AbsentMarker:
    def __repr__(self) -> str:
        return '<absent>'


_ABSENT_MARKER = _AbsentMarker()


class OptionalValue(Generic[T]):
    """
    An immutable object that either holds a non-None value ("present"),
    or holds nothing ("absent"). It never holds None.

    Instances are created via `of`, `from_nullable` or `absent`.
    There is a single absent instance, shared across all value types.
    """

    __slots__ = ('_value',)

    def __init__(self, value: Any):
        # use the factory methods rather than calling this directly
        self._value = check_not_null(value)

    @staticmethod
    def absent() -> 'OptionalValue[Any]':
        return _ABSENT

    @staticmethod
    def of(value: T) -> 'OptionalValue[T]':
        return OptionalValue(value)

    @staticmethod
    def from_nullable(value: Optional[T]) -> 'OptionalValue[T]':
        if value is None:
            return _ABSENT
        return OptionalValue(value)

    def is_present(self) -> bool:
        return self._value is not _ABSENT_MARKER

    def __bool__(self) -> bool:
        return self.is_present()

    def get(self) -> T:
        if not self.is_present():
            raise IllegalStateError(
                'OptionalValue.get() cannot be called on an absent value'
            )
        return cast(T, self._value)

    def or_(self, default_value: T) -> T:
        if self.is_present():
            return cast(T, self._value)
        return check_not_null(
            default_value,
            'use OptionalValue.or_none() instead of OptionalValue.or_(None)'
        )

    def or_optional(self, second_choice: 'OptionalValue[T]') -> 'OptionalValue[T]':
        check_not_null(second_choice)
        if self.is_present():
            return self
        return second_choice

    def or_supplier(self, supplier: Supplier[T]) -> T:
        check_not_null(supplier)
        if self.is_present():
            return cast(T, self._value)
        return check_not_null(
            supplier.get(),
            'use OptionalValue.or_none() instead of a supplier that returns None'
        )

    def or_none(self) -> Optional[T]:
        if self.is_present():
            return cast(T, self._value)
        return None

    def as_set(self) -> FrozenSet[T]:
        if self.is_present():
            return frozenset([cast(T, self._value)])
        return frozenset()

    def transform(self, function: Callable[[T], R]) -> 'OptionalValue[R]':
        check_not_null(function)
        if not self.is_present():
            return _ABSENT
        return OptionalValue(check_not_null(
            function(cast(T, self._value)),
            'the function passed to OptionalValue.transform() must not return None'
        ))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptionalValue):
            return False
        if not self.is_present() or not other.is_present():
            return self.is_present() == other.is_present()
        return bool(self._value == other._value)

    def __hash__(self) -> int:
        if not self.is_present():
            return ABSENT_HASH_CODE
        return ABSENT_HASH_CODE + hash(self._value)

    def __str__(self) -> str:
        if not self.is_present():
            return 'Optional.Absent()'
        return f'Optional.Of({self._value})'

    def __repr__(self) -> str:
        return str(self)

    def __reduce__(self):
        if not self.is_present():
            return (OptionalValue.absent, ())
        return (OptionalValue.of, (self._value,))

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, '_value'):
            raise AttributeError(f'{type(self).__name__} is immutable')
        super().__setattr__(name, value)


_ABSENT: OptionalValue[Any] = OptionalValue(_ABSENT_MARKER)


absent = OptionalValue.absent
of = OptionalValue.of
from_nullable = OptionalValue.from_nullable


class _PresentInstancesIterable(Iterable[T]):
    def __init__(self, optionals: Iterable[OptionalValue[T]]):
        self.optionals = optionals

    def __iter__(self) -> Iterator[T]:
        return (
            optional.get()
            for optional in self.optionals
            if optional.is_present()
        )


def present_instances(optionals: Iterable[OptionalValue[T]]) -> Iterable[T]:
    """
    Returns the values of the present instances, skipping absent ones.
    The result is lazy, and each iteration re-iterates `optionals`.
    """
    return _PresentInstancesIterable(check_not_null(optionals))
