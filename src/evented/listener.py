"""
listener.py

Listener records and dispatch frames used by the event emitter.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .errors import InvalidListenerError


@dataclass(frozen=True)
class Callback:
    """A plain callable registered as a listener."""

    fn: Callable[..., Any]


@dataclass(frozen=True)
class Delegate:
    """Another emitter registered as a listener; events are re-emitted on it."""

    emitter: Any
    alias: str | None = None

    def event_name(self, name: str) -> str:
        return name if self.alias is None else self.alias


ListenerTarget = Callback | Delegate


def is_emitter_like(obj: object) -> bool:
    """Check whether ``obj`` can receive forwarded events (exposes a callable ``emit``)."""
    return not callable(obj) and callable(getattr(obj, "emit", None))


def resolve_target(listener: object, alias: str | None = None) -> ListenerTarget:
    """
    Turn a user-supplied listener into a tagged target.

    Args:
        listener: A callable, or an emitter-like object to delegate to
        alias: Event name to use when re-emitting on a delegate

    Returns:
        Callback or Delegate

    Raises:
        InvalidListenerError: If the listener is neither callable nor emitter-like
    """
    if is_emitter_like(listener):
        return Delegate(listener, alias)
    if callable(listener):
        return Callback(listener)
    msg = f"Listener must be a function or an EventEmitter, got {type(listener).__name__}"
    raise InvalidListenerError(msg)


class ListenerRecord:
    """One subscription of a listener to an event name."""

    __slots__ = ("context", "event_name", "once", "owner", "removed", "target")

    def __init__(self, event_name: str, target: ListenerTarget, context: object = None, once: bool = False) -> None:
        self.event_name = event_name
        self.target = target
        # None means "the owning emitter"
        self.context = context
        self.once = once
        # emitter the record was registered on; a record is registered at most once
        self.owner = None
        self.removed = False

    @property
    def callback(self) -> Any:
        """The raw function or delegate emitter this record was created from."""
        if isinstance(self.target, Delegate):
            return self.target.emitter
        return self.target.fn

    def matches(self, listener: object) -> bool:
        if listener is self:
            return True
        callback = self.callback
        return callback is listener or (not isinstance(listener, ListenerRecord) and callback == listener)

    def __repr__(self) -> str:
        kind = "once" if self.once else "on"
        return f"<ListenerRecord {kind} {self.event_name!r} -> {self.callback!r}>"


@dataclass
class DispatchFrame:
    """State of one in-flight ``emit`` call."""

    event_name: str
    data: list[Any]
    emitter: Any = None
    context: Any = None
    stopped: bool = field(default=False)

    def stop(self) -> bool:
        self.stopped = True
        return True

    def replace_data(self, args: tuple[Any, ...]) -> None:
        # 原地替换，后续监听器拿到的是同一个列表
        self.data[:] = args


__all__ = ["Callback", "Delegate", "DispatchFrame", "ListenerRecord", "ListenerTarget", "is_emitter_like", "resolve_target"]
