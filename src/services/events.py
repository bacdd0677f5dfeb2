"""Minimal observer registry used for session and workspace notifications."""

from typing import Callable, Generic, TypeVar

from loguru import logger

T = TypeVar("T")

Handler = Callable[[T], None]


class EventEmitter(Generic[T]):
    """
    Synchronous event with multiple observers.

    ``subscribe`` returns a callable that removes the handler again.
    Handlers run in subscription order; a failing handler is logged and
    does not stop the others.
    """

    def __init__(self, name: str):
        self.name = name
        self._handlers: list[Handler] = []

    def subscribe(self, handler: Handler) -> Callable[[], None]:
        self._handlers.append(handler)
        logger.debug(f"Subscribed to {self.name}: {getattr(handler, '__name__', handler)!r}")

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def emit(self, payload: T) -> None:
        for handler in list(self._handlers):
            try:
                handler(payload)
            except Exception as e:
                logger.error(f"Handler for {self.name} failed: {e}")

    def clear(self) -> None:
        self._handlers.clear()

    def __len__(self) -> int:
        return len(self._handlers)
