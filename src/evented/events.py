"""
events.py

Synchronous event emitter with one-shot listeners, delegation and scoped stop.
"""

from collections.abc import Callable
from logging import getLogger
from typing import Any, ClassVar

from .config import DEFAULT_MAX_LISTENERS, validate_max_listeners
from .errors import InvalidListenerError, SelfEmitError, UnhandledErrorEvent
from .listener import Delegate, DispatchFrame, ListenerRecord, is_emitter_like, resolve_target

logger = getLogger("evented")


class EventEmitter:
    """
    Registry of named listeners with synchronous, ordered dispatch.

    Listeners run on the caller's stack in registration order. A listener may
    register, remove or emit (on this or any other emitter) while it runs; each
    ``emit`` call gets its own dispatch frame, so ``stop_emit`` and
    ``set_event_data`` only affect the innermost emission of this emitter.
    """

    MAX_LISTENERS: ClassVar[int] = DEFAULT_MAX_LISTENERS
    EVENT_NEW_LISTENER: ClassVar[str] = "newListener"
    EVENT_REMOVE_LISTENER: ClassVar[str] = "removeListener"
    EVENT_ERROR: ClassVar[str] = "error"

    # 进程级的帧栈，只给 EventEmitter.stop() 用
    _active: ClassVar[list[DispatchFrame]] = []

    def __init__(self, max_listeners: float | None = None) -> None:
        """
        Initialize an empty emitter.

        Args:
            max_listeners: Soft per-event cap used for leak warnings, defaults to MAX_LISTENERS
        """
        self._events: dict[str, list[ListenerRecord]] | None = None
        self._max_listeners = self.MAX_LISTENERS if max_listeners is None else validate_max_listeners(max_listeners)
        self._frames: list[DispatchFrame] = []
        self._warned: set[str] = set()

    # registration

    def on(self, name: str, listener: "Callable[..., Any] | EventEmitter | ListenerRecord", context: object = None) -> "EventEmitter":
        """
        Register a listener for an event.

        Args:
            name: Event name
            listener: Function to call, an emitter to forward the event to, or a
                ListenerRecord built for ``name`` that has not been registered yet
            context: Receiver reported by get_event_context() while the listener runs;
                overrides the context of a ListenerRecord when given

        Returns:
            The emitter itself, for chaining
        """
        return self._add_listener(name, listener, context, once=False)

    add_listener = on

    def once(self, name: str, listener: "Callable[..., Any] | EventEmitter | ListenerRecord", context: object = None) -> "EventEmitter":
        """Register a listener that is removed the first time the event is emitted."""
        return self._add_listener(name, listener, context, once=True)

    def delegate(self, name: str, target: "EventEmitter", alias: str | None = None) -> "EventEmitter":
        """
        Forward an event to another emitter.

        Args:
            name: Event name to forward
            target: Emitter that re-emits the event
            alias: Event name used on the target, defaults to ``name``

        Returns:
            The emitter itself, for chaining
        """
        if not is_emitter_like(target):
            msg = f"Delegate target must be an EventEmitter, got {type(target).__name__}"
            raise InvalidListenerError(msg)
        return self._add_listener(name, target, None, once=False, alias=alias)

    def _add_listener(self, name: str, listener: object, context: object, *, once: bool, alias: str | None = None) -> "EventEmitter":
        if isinstance(listener, ListenerRecord):
            record = self._adopt_record(name, listener, context, once=once)
        else:
            record = ListenerRecord(name, resolve_target(listener, alias), context, once)
        if isinstance(record.target, Delegate) and record.target.emitter is self:
            msg = "Can't emit on itself"
            raise SelfEmitError(msg)
        if self._events is None:
            self._events = {}
        if self._events.get(self.EVENT_NEW_LISTENER):
            self.emit(self.EVENT_NEW_LISTENER, name, record.callback, self if record.context is None else record.context)
        if record.context is self:
            record.context = None
        record.owner = self
        records = self._events.setdefault(name, [])
        records.append(record)
        logger.debug("Added %s listener %r for event '%s'", "once" if record.once else "on", record.callback, name)
        self._check_listener_limit(name, len(records))
        return self

    @staticmethod
    def _adopt_record(name: str, record: ListenerRecord, context: object, *, once: bool) -> ListenerRecord:
        if record.owner is not None or record.removed:
            msg = f"{record!r} has already been registered"
            raise InvalidListenerError(msg)
        if record.event_name != name:
            msg = f"{record!r} cannot be registered for event '{name}'"
            raise InvalidListenerError(msg)
        if context is not None:
            record.context = context
        if once:
            record.once = True
        return record

    def _check_listener_limit(self, name: str, count: int) -> None:
        if not self._max_listeners or count <= self._max_listeners or name in self._warned:
            return
        self._warned.add(name)
        logger.warning(
            "Possible EventEmitter memory leak detected. %d '%s' listeners added, limit is %s. Use set_max_listeners() to increase it.",
            count,
            name,
            self._max_listeners,
        )

    # removal

    def off(self, name: str, listener: "Callable[..., Any] | EventEmitter | ListenerRecord") -> "EventEmitter":
        """
        Remove the most recently registered matching listener.

        Does nothing if no registered listener matches.

        Args:
            name: Event name
            listener: The function or emitter passed at registration, or the record itself

        Returns:
            The emitter itself, for chaining
        """
        if not (isinstance(listener, ListenerRecord) or callable(listener) or is_emitter_like(listener)):
            msg = "Listener must be a function, an EventEmitter or a ListenerRecord"
            raise InvalidListenerError(msg)
        records = self._events.get(name) if self._events else None
        if not records:
            return self
        for index in range(len(records) - 1, -1, -1):
            if records[index].matches(listener):
                self._remove_at(name, index)
                break
        return self

    remove_listener = off

    def undelegate(self, name: str, target: "EventEmitter") -> "EventEmitter":
        """Stop forwarding ``name`` to ``target``."""
        return self.off(name, target)

    def _remove_record(self, record: ListenerRecord) -> None:
        records = self._events.get(record.event_name) if self._events else None
        if not records:
            return
        for index, candidate in enumerate(records):
            if candidate is record:
                self._remove_at(record.event_name, index)
                return

    def _remove_at(self, name: str, index: int) -> None:
        # handlers registered before the removal are notified, so a
        # removeListener handler also hears about its own removal
        handlers = list(self._events.get(self.EVENT_REMOVE_LISTENER, ()))
        records = self._events[name]
        record = records.pop(index)
        record.removed = True
        if not records:
            del self._events[name]
        logger.debug("Removed listener %r for event '%s'", record.callback, name)
        if handlers:
            self._dispatch(self.EVENT_REMOVE_LISTENER, handlers, (name, record.callback), keep=record)

    def remove_all_listeners(self, name: str | None = None) -> "EventEmitter":
        """
        Remove every listener of ``name``, or of every event when no name is given.

        When a ``removeListener`` listener is registered, each removal is
        reported to the ``removeListener`` listeners present before it, and those
        listeners are removed last, each hearing about its own removal.
        """
        if not self._events:
            return self
        if not self._events.get(self.EVENT_REMOVE_LISTENER):
            if name is None:
                self._drop_all()
            else:
                for record in self._events.pop(name, ()):
                    record.removed = True
            return self
        if name is None:
            for key in list(self._events):
                if key != self.EVENT_REMOVE_LISTENER:
                    self.remove_all_listeners(key)
            self.remove_all_listeners(self.EVENT_REMOVE_LISTENER)
            self._drop_all()
            return self
        for record in reversed(list(self._events.get(name, ()))):
            self._remove_record(record)
        return self

    def _drop_all(self) -> None:
        for records in self._events.values():
            for record in records:
                record.removed = True
        self._events.clear()

    # introspection

    def listeners(self, name: str | None = None) -> list[Any]:
        """Return the functions and delegate emitters registered for ``name``, in dispatch order."""
        if name is None or not self._events:
            return []
        return [record.callback for record in self._events.get(name, ())]

    @staticmethod
    def listener_count(emitter: object, name: str) -> int:
        """Number of listeners ``emitter`` has for ``name``; 0 for anything that is not an EventEmitter."""
        if not isinstance(emitter, EventEmitter) or not emitter._events:
            return 0
        return len(emitter._events.get(name, ()))

    def set_max_listeners(self, count: float) -> None:
        """Set the per-event listener count above which a warning is logged; 0 disables it."""
        self._max_listeners = validate_max_listeners(count)
        self._warned.clear()

    @property
    def max_listeners(self) -> float:
        return self._max_listeners

    # dispatch

    def emit(self, name: str, *args: Any) -> bool:
        """
        Call every listener of ``name`` with ``args``.

        Args:
            name: Event name
            *args: Positional arguments passed to each listener

        Returns:
            True if the event had listeners, False otherwise

        Raises:
            UnhandledErrorEvent: If ``error`` is emitted without listeners and the
                first argument is not an exception (an exception is raised as is)
        """
        records = self._events.get(name) if self._events else None
        if not records:
            if name == self.EVENT_ERROR:
                error = args[0] if args else None
                if isinstance(error, BaseException):
                    raise error
                msg = 'Uncaught, unspecified "error" event.'
                raise UnhandledErrorEvent(msg)
            logger.debug("Emitting '%s' with no listeners", name)
            return False
        self._dispatch(name, records, args)
        return True

    def _dispatch(self, name: str, records: list[ListenerRecord], args: tuple[Any, ...], keep: ListenerRecord | None = None) -> None:
        """
        Run ``records`` for one emission of ``name``.

        Records removed from the registry before they are reached are skipped,
        except ``keep`` unless it is a one-shot record.
        """
        frame = DispatchFrame(name, list(args), self)
        self._frames.append(frame)
        EventEmitter._active.append(frame)
        try:
            # 遍历快照：本轮新注册的监听器不会被调用
            for record in list(records):
                if record.removed and (record is not keep or record.once):
                    continue
                if record.once:
                    self._remove_record(record)
                frame.context = self if record.context is None else record.context
                target = record.target
                if isinstance(target, Delegate):
                    target.emitter.emit(target.event_name(name), *frame.data)
                else:
                    target.fn(*frame.data)
                if frame.stopped:
                    break
        finally:
            EventEmitter._active.pop()
            self._frames.pop()

    # current dispatch

    def _current_frame(self) -> DispatchFrame | None:
        return self._frames[-1] if self._frames else None

    def stop_emit(self, name: str | None = None) -> bool:
        """
        Skip the remaining listeners of the innermost emission on this emitter.

        Args:
            name: Only stop if the current event has this name

        Returns:
            True if an emission was stopped
        """
        frame = self._current_frame()
        if frame is None or (name is not None and name != frame.event_name):
            return False
        return frame.stop()

    @classmethod
    def stop(cls, context: object = None) -> bool:
        """
        Stop the innermost emission of whichever emitter is currently dispatching.

        Args:
            context: Only stop if the running listener's receiver is this object

        Returns:
            True if an emission was stopped
        """
        if not cls._active:
            return False
        frame = cls._active[-1]
        if context is not None and context is not frame.context:
            return False
        return frame.stop()

    def set_event_data(self, *args: Any) -> "EventEmitter":
        """Replace the arguments passed to the remaining listeners of the current emission."""
        frame = self._current_frame()
        if frame is not None:
            frame.replace_data(args)
        return self

    replace_event_data = set_event_data

    def get_event_data(self) -> list[Any] | None:
        frame = self._current_frame()
        return None if frame is None else list(frame.data)

    def get_event_type(self) -> str | None:
        frame = self._current_frame()
        return None if frame is None else frame.event_name

    def get_event_context(self) -> Any:
        """Receiver of the listener currently running: its registration context, or this emitter."""
        frame = self._current_frame()
        return None if frame is None else frame.context


def create_emitter(emitter: EventEmitter, name: str) -> Callable[..., bool]:
    """
    Create an emit function bound to one event.

    Args:
        emitter: Emitter to dispatch on
        name: Event name

    Returns:
        A function that emits ``name`` with the arguments it is called with
    """
    def emit(*args: Any) -> bool:
        return emitter.emit(name, *args)
    return emit
