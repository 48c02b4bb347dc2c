"""
Example: Advanced Event Usage

This example demonstrates advanced event patterns including:
- Stopping an emission from inside a listener
- Replacing event data for later listeners
- Delegating events to another emitter
- Listener-count warnings
"""

import logging

from evented import EventEmitter


def main():
    logging.basicConfig(level=logging.WARNING, format="   [%(levelname)s] %(message)s")

    print("=== Advanced Events Demo ===\n")

    # Example 1: Validation chain that stops on the first failure
    print("1. Stopping an emission:")
    validator = EventEmitter()

    def require_name(form):
        if not form.get("name"):
            print("   name is missing, stopping")
            validator.stop_emit()

    validator.on("submit", require_name)
    validator.on("submit", lambda form: print(f"   saving {form}"))
    validator.emit("submit", {"name": ""})
    validator.emit("submit", {"name": "Ada"})
    print()

    # Example 2: Normalizing data for the listeners that follow
    print("2. Replacing event data:")
    pipeline = EventEmitter()
    pipeline.on("message", lambda text: pipeline.set_event_data(text.strip().lower()))
    pipeline.on("message", lambda text: print(f"   received {text!r}"))
    pipeline.emit("message", "  Hello World  ")
    print()

    # Example 3: Delegation
    print("3. Delegating to another emitter:")
    audit = EventEmitter()
    audit.on("audit", lambda *args: print(f"   audit log: {args}"))
    pipeline.delegate("message", audit, "audit")
    pipeline.emit("message", "  Forwarded  ")
    pipeline.undelegate("message", audit)
    pipeline.emit("message", "  Not forwarded  ")
    print()

    # Example 4: Listener-count warning
    print("4. Too many listeners:")
    noisy = EventEmitter(max_listeners=2)
    for _ in range(3):
        noisy.on("tick", lambda: None)
    print()

    print("=== Demo Complete ===")


if __name__ == "__main__":
    main()
