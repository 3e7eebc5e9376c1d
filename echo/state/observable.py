import logging
import threading
from typing import Callable, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ObservableState(Generic[T]):
    """
    Holds the latest published snapshot of one collection.

    Snapshots are replaced wholesale. When a reload fails the previous
    snapshot is kept and ``stale`` is raised until the next publish.
    """

    def __init__(self, name: str, initial: T):
        self.name = name
        self._value = initial
        self._stale = False
        self._last_error: Optional[BaseException] = None
        self._subscribers: List[Callable[[T], None]] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        return self._value

    @property
    def stale(self) -> bool:
        return self._stale

    @property
    def last_error(self) -> Optional[BaseException]:
        return self._last_error

    def subscribe(self, callback: Callable[[T], None], emit_current: bool = True) -> Callable[[], None]:
        """
        Registers ``callback`` for every future snapshot.

        Returns:
            Callable[[], None]: Removes the subscription when called.
        """
        with self._lock:
            self._subscribers.append(callback)
        if emit_current:
            callback(self._value)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, value: T) -> None:
        with self._lock:
            self._value = value
            self._stale = False
            self._last_error = None
        self._notify()

    def mark_stale(self, error: BaseException) -> None:
        with self._lock:
            self._stale = True
            self._last_error = error
        self._notify()

    def clear_subscribers(self) -> None:
        with self._lock:
            self._subscribers.clear()

    def _notify(self) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(self._value)
            except Exception:
                logger.exception(f"Subscriber of {self.name} failed")
