"""
Test cases for the newListener and removeListener events.
"""

from unittest.mock import Mock, call

import pytest

from evented import EventEmitter

NAME = "event"
NEW_LISTENER = EventEmitter.EVENT_NEW_LISTENER
REMOVE_LISTENER = EventEmitter.EVENT_REMOVE_LISTENER


@pytest.fixture
def emitter():
    return EventEmitter()


def test_constants():
    """Test the reserved event names."""
    assert NEW_LISTENER == "newListener"
    assert REMOVE_LISTENER == "removeListener"
    assert EventEmitter.EVENT_ERROR == "error"


class TestNewListener:
    """Test the newListener notification."""

    def test_default_context(self, emitter):
        """Test that the emitter is reported when no context is given."""
        listener = Mock()

        def handler():
            pass

        emitter.on(NEW_LISTENER, listener).on(NAME, handler)

        listener.assert_called_once_with(NAME, handler, emitter)

    def test_custom_context(self, emitter):
        """Test that a custom context is reported, even a falsy one."""
        listener = Mock()

        def handler():
            pass

        emitter.on(NEW_LISTENER, listener).on(NAME, handler, False)

        listener.assert_called_once_with(NAME, handler, False)

    def test_emitted_before_record_is_added(self, emitter):
        """Test that the notified listener is not registered yet."""
        counts = []
        emitter.on(NEW_LISTENER, lambda name, *_: counts.append(EventEmitter.listener_count(emitter, name)))

        emitter.on(NAME, Mock()).on(NAME, Mock())

        assert counts == [0, 1]

    def test_not_emitted_for_first_new_listener(self, emitter):
        """Test that registering the first newListener listener is not reported to itself."""
        listener = Mock()
        emitter.on(NEW_LISTENER, listener)
        listener.assert_not_called()

    def test_once_and_delegate_notify(self, emitter):
        """Test that once listeners and delegates are reported too."""
        listener = Mock()
        other = EventEmitter()
        handler = Mock()

        emitter.on(NEW_LISTENER, listener)
        emitter.once(NAME, handler)
        emitter.delegate(NAME, other)

        assert listener.call_args_list == [call(NAME, handler, emitter), call(NAME, other, emitter)]


class TestRemoveListener:
    """Test the removeListener notification."""

    def test_emitted_after_off(self, emitter):
        """Test that off reports the removed listener."""
        listener = Mock()

        def first():
            pass

        def second():
            pass

        emitter.on(REMOVE_LISTENER, listener).on(NAME, first).on(NAME, second).off(NAME, first)

        listener.assert_called_once_with(NAME, first)

    def test_emitted_after_removal(self, emitter):
        """Test that the listener is already gone when the notification runs."""
        remaining = []
        handler = Mock()
        emitter.on(REMOVE_LISTENER, lambda name, _: remaining.append(emitter.listeners(name)))
        emitter.on(NAME, handler).off(NAME, handler)

        assert remaining == [[]]

    def test_not_emitted_when_nothing_removed(self, emitter):
        """Test that removing an unknown listener is not reported."""
        listener = Mock()
        emitter.on(REMOVE_LISTENER, listener).off(NAME, Mock())
        listener.assert_not_called()

    def test_emitted_for_own_removal(self, emitter):
        """Test that a removeListener listener hears about its own removal."""
        listener = Mock()
        emitter.on(REMOVE_LISTENER, listener)

        emitter.off(REMOVE_LISTENER, listener)

        listener.assert_called_once_with(REMOVE_LISTENER, listener)
        assert emitter.listeners(REMOVE_LISTENER) == []

    def test_emitted_when_last_remove_listener_removed(self, emitter):
        """Test that every removal is reported to the listeners present before it."""
        listener = Mock()
        emitter.on(REMOVE_LISTENER, listener).on(REMOVE_LISTENER, listener)

        # first removal reaches both registrations, the second only the removed one
        emitter.off(REMOVE_LISTENER, listener).off(REMOVE_LISTENER, listener)

        assert listener.call_count == 3

    def test_emitted_for_each_record_on_remove_all(self, emitter):
        """Test that remove_all_listeners reports every record, the removeListener listener last."""
        listener = Mock()

        def first():
            pass

        def second():
            pass

        emitter.on(REMOVE_LISTENER, listener).on(NAME, first).on(NAME, second).remove_all_listeners()

        assert listener.call_args_list == [call(NAME, second), call(NAME, first), call(REMOVE_LISTENER, listener)]
        assert emitter.listeners(REMOVE_LISTENER) == []

    def test_remove_all_counts_own_removal(self, emitter):
        """Test that the notification count includes the listener's own removal."""
        listener = Mock()
        emitter.on(REMOVE_LISTENER, listener).on("a", Mock()).on("b", Mock())

        emitter.remove_all_listeners()

        assert listener.call_count == 3
        assert emitter.listeners("a") == []
        assert emitter.listeners("b") == []

    def test_remove_all_for_name_notifies_in_reverse(self, emitter):
        """Test that removing one event's listeners reports them last registered first."""
        listener = Mock()

        def first():
            pass

        def second():
            pass

        emitter.on(REMOVE_LISTENER, listener).on(NAME, first).on(NAME, second).remove_all_listeners(NAME)

        assert listener.call_args_list == [call(NAME, second), call(NAME, first)]
        assert emitter.listeners(REMOVE_LISTENER) == [listener]

    def test_remove_all_removes_remove_listeners_last(self, emitter):
        """Test that removeListener listeners are removed after every other event."""
        first, second = Mock(), Mock()
        emitter.on(REMOVE_LISTENER, first).on(REMOVE_LISTENER, second).on(NAME, Mock())

        emitter.remove_all_listeners()

        # NAME reaches both, removing `second` reaches both, removing `first` reaches `first`
        assert first.call_count == 3
        assert second.call_count == 2
        assert second.call_args == call(REMOVE_LISTENER, second)
        assert first.call_args == call(REMOVE_LISTENER, first)

    def test_once_removal_notifies(self, emitter):
        """Test that consuming a once listener is reported."""
        listener = Mock()
        handler = Mock()
        emitter.on(REMOVE_LISTENER, listener).once(NAME, handler)

        emitter.emit(NAME)

        listener.assert_called_once_with(NAME, handler)
        handler.assert_called_once_with()

    def test_once_remove_listener_runs_once(self, emitter):
        """Test that a once removeListener listener is not called again for its own removal."""
        listener = Mock()
        handler = Mock()
        emitter.once(REMOVE_LISTENER, listener).on(NAME, handler)

        emitter.off(NAME, handler)

        listener.assert_called_once_with(NAME, handler)
        assert emitter.listeners(REMOVE_LISTENER) == []
