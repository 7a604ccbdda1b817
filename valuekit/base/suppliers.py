import logging
import weakref
from abc import ABC, abstractmethod
from datetime import timedelta
from threading import Lock
from time import monotonic
from typing import Any, Callable, Dict, Generic, Optional, Protocol, Tuple, TypeVar, Union

from valuekit.base.preconditions import check_argument, check_not_null


LOGGER = logging.getLogger(__name__)


T = TypeVar('T')
S = TypeVar('S')
T_co = TypeVar('T_co', covariant=True)


DurationT = Union[float, timedelta]


class Supplier(Protocol[T_co]):
    def get(self) -> T_co:
        pass


class BaseSupplier(ABC, Generic[T]):
    @abstractmethod
    def get(self) -> T:
        pass

    def __call__(self) -> T:
        return self.get()


class CallableSupplier(BaseSupplier[T]):
    def __init__(self, fn: Callable[[], T]):
        self.fn = fn

    def get(self) -> T:
        return self.fn()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CallableSupplier):
            return self.fn == other.fn
        return False

    def __hash__(self) -> int:
        return hash(self.fn)

    def __repr__(self) -> str:
        return f'Suppliers.from_callable({self.fn!r})'


class SupplierOfInstance(BaseSupplier[T]):
    def __init__(self, instance: Optional[T]):
        self.instance = instance

    def get(self) -> T:
        return self.instance  # type: ignore

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SupplierOfInstance):
            return self.instance == other.instance
        return False

    def __hash__(self) -> int:
        return hash((SupplierOfInstance, self.instance))

    def __repr__(self) -> str:
        return f'Suppliers.of_instance({self.instance!r})'


class SupplierComposition(BaseSupplier[T], Generic[S, T]):
    def __init__(self, function: Callable[[S], T], supplier: Supplier[S]):
        self.function = function
        self.supplier = supplier

    def get(self) -> T:
        return self.function(self.supplier.get())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SupplierComposition):
            return (
                self.function == other.function
                and self.supplier == other.supplier
            )
        return False

    def __hash__(self) -> int:
        return hash((self.function, self.supplier))

    def __repr__(self) -> str:
        return f'Suppliers.compose({self.function!r}, {self.supplier!r})'


class MemoizingSupplier(BaseSupplier[T]):
    def __init__(self, delegate: Supplier[T]):
        self.delegate = check_not_null(delegate)
        self._lock = Lock()
        self._initialized = False
        self._value: Optional[T] = None

    def get(self) -> T:
        if not self._initialized:
            with self._lock:
                # recheck, another thread may have won the race for the lock
                if not self._initialized:
                    value = self.delegate.get()
                    LOGGER.debug('memoized value of %r', self.delegate)
                    self._value = value
                    self._initialized = True
                    return value
        return self._value  # type: ignore

    def __repr__(self) -> str:
        return f'Suppliers.memoize({self.delegate!r})'


def get_duration_in_seconds(duration: DurationT) -> float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


class ExpiringMemoizingSupplier(BaseSupplier[T]):
    def __init__(self, delegate: Supplier[T], duration: DurationT):
        self.delegate = check_not_null(delegate)
        self.duration_in_seconds = get_duration_in_seconds(duration)
        check_argument(
            self.duration_in_seconds > 0,
            'duration must be positive, got %s',
            duration
        )
        self._lock = Lock()
        self._value: Optional[T] = None
        self._expiration_time: Optional[float] = None

    def get(self) -> T:
        # the expiry is read once outside the lock, the value may be recomputed
        # more than once if several threads see it expire at the same time
        expiration_time = self._expiration_time
        now = monotonic()
        if expiration_time is None or now >= expiration_time:
            with self._lock:
                if expiration_time == self._expiration_time:
                    value = self.delegate.get()
                    self._value = value
                    self._expiration_time = now + self.duration_in_seconds
                    LOGGER.debug(
                        'memoized value of %r until: %r',
                        self.delegate,
                        self._expiration_time
                    )
                    return value
        return self._value  # type: ignore

    def __repr__(self) -> str:
        return (
            f'Suppliers.memoize_with_expiration({self.delegate!r},'
            f' {self.duration_in_seconds!r}, SECONDS)'
        )


_LOCK_BY_DELEGATE: 'weakref.WeakKeyDictionary[Any, Lock]' = weakref.WeakKeyDictionary()
_DELEGATE_AND_LOCK_BY_DELEGATE_ID: Dict[int, Tuple[Any, Lock]] = {}
_LOCK_REGISTRY_LOCK = Lock()


def get_lock_for_delegate(delegate: Any) -> Lock:
    with _LOCK_REGISTRY_LOCK:
        try:
            lock = _LOCK_BY_DELEGATE.get(delegate)
            if lock is None:
                lock = Lock()
                _LOCK_BY_DELEGATE[delegate] = lock
            return lock
        except TypeError:
            # not hashable or not weakly referenceable, keep the delegate alive instead
            LOGGER.debug('using lock by id for delegate: %r', delegate)
            _, lock = _DELEGATE_AND_LOCK_BY_DELEGATE_ID.setdefault(
                id(delegate),
                (delegate, Lock())
            )
            return lock


class ThreadSafeSupplier(BaseSupplier[T]):
    def __init__(self, delegate: Supplier[T]):
        self.delegate = check_not_null(delegate)
        self._lock = get_lock_for_delegate(delegate)

    def get(self) -> T:
        with self._lock:
            return self.delegate.get()

    def __repr__(self) -> str:
        return f'Suppliers.synchronized_supplier({self.delegate!r})'


def from_callable(fn: Callable[[], T]) -> Supplier[T]:
    return CallableSupplier(check_not_null(fn))


def of_instance(instance: Optional[T]) -> Supplier[T]:
    return SupplierOfInstance(instance)


def compose(function: Callable[[S], T], supplier: Supplier[S]) -> Supplier[T]:
    check_not_null(function)
    check_not_null(supplier)
    return SupplierComposition(function, supplier)


def memoize(delegate: Supplier[T]) -> Supplier[T]:
    if isinstance(delegate, MemoizingSupplier):
        return delegate
    return MemoizingSupplier(delegate)


def memoize_with_expiration(delegate: Supplier[T], duration: DurationT) -> Supplier[T]:
    return ExpiringMemoizingSupplier(delegate, duration)


def synchronized_supplier(delegate: Supplier[T]) -> Supplier[T]:
    return ThreadSafeSupplier(delegate)