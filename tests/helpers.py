"""Shared test helpers for PomoTimer."""

from pomotimer.timer.engine import TimerEngine


class CallbackCollector:
    """Records every argument an engine subscriber is called with."""

    def __init__(self):
        self.items: list = []

    def __call__(self, item):
        self.items.append(item)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def complete_session(engine: TimerEngine) -> None:
    """Run the current session out by jumping to its last tick."""
    if not engine.is_running:
        engine.start()
    engine._remaining = 1
    engine._on_tick()
