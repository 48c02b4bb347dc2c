"""
Example: Basic Event Usage

This example demonstrates registering listeners, one-shot listeners,
removal and the unhandled error event.
"""

from dataclasses import dataclass

from evented import EventEmitter, UnhandledErrorEvent, create_emitter


@dataclass
class TaskEvent:
    event_type: str
    message: str
    progress: int = 0


def run_task(name: str, emit) -> str:
    """A task that reports progress through an emit function."""
    emit(TaskEvent(event_type="start", message=f"Starting task: {name}"))
    for i in range(3):
        emit(TaskEvent(event_type="progress", message=f"Step {i + 1} of 3", progress=(i + 1) * 33))
    emit(TaskEvent(event_type="complete", message=f"Completed: {name}", progress=100))
    return f"Task '{name}' finished"


def main():
    """Demonstrate basic event usage."""
    print("=== Basic Events Demo ===\n")

    emitter = EventEmitter()

    # Example 1: Listeners run in registration order
    print("1. Task progress:")

    def handle_task_event(event: TaskEvent):
        if event.event_type == "start":
            print(f"   [START] {event.message}")
        elif event.event_type == "progress":
            print(f"   [PROGRESS] {event.message} ({event.progress}%)")
        elif event.event_type == "complete":
            print(f"   [COMPLETE] {event.message}")

    emitter.on("task", handle_task_event)
    emitter.once("task", lambda event: print(f"   [FIRST EVENT] {event.event_type}"))
    result = run_task("Hello World", create_emitter(emitter, "task"))
    print(f"   Result: {result}\n")

    # Example 2: Removal
    print("2. After removing the progress handler:")
    emitter.off("task", handle_task_event)
    print(f"   emit returned: {emitter.emit('task', TaskEvent('start', 'ignored'))}\n")

    # Example 3: Unhandled error event
    print("3. Error event without listeners:")
    try:
        emitter.emit("error", "not an exception")
    except UnhandledErrorEvent as e:
        print(f"   Exception caught: {e}\n")

    print("=== Demo Complete ===")


if __name__ == "__main__":
    main()
