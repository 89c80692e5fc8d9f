"""
Game Clock - the periodic tick source for a Traffic Tamer session.

Fires once per second on the Qt event loop. Each tick carries the session
generation it was armed for, so the engine can drop ticks that belong to a
session that has since been reset.
"""

from PySide6.QtCore import QObject, Qt, Signal, QTimer


class GameClock(QObject):
    """
    Fixed-rate countdown clock (1 Hz by default).

    The clock does not count time itself; the session owns time_left. It
    only delivers ticks and guarantees that after stop() no further tick
    from the previous arming is delivered.

    Usage:
        clock = GameClock()
        clock.tick.connect(engine.tick)
        clock.start(generation=session.generation)
        ...
        clock.stop()
    """

    # Signals
    tick = Signal(int)      # generation the clock was armed for
    started = Signal(int)
    stopped = Signal()

    # Constants
    TICK_INTERVAL_MS = 1000

    def __init__(self, interval_ms: int = None):
        """
        Initialize the clock.

        Args:
            interval_ms: Custom tick interval in milliseconds (default: 1000)
        """
        super().__init__()

        self._interval_ms = interval_ms or self.TICK_INTERVAL_MS
        self._generation = 0
        self._tick_count = 0

        self._timer = QTimer(self)
        self._timer.setInterval(self._interval_ms)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_running(self) -> bool:
        """Check if the clock is currently delivering ticks."""
        return self._timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def generation(self) -> int:
        """Generation of the current (or last) arming."""
        return self._generation

    @property
    def tick_count(self) -> int:
        """Ticks delivered since the last start()."""
        return self._tick_count

    def start(self, generation: int = 0) -> None:
        """Arm the clock for a session generation, restarting it if running."""
        self._timer.stop()
        self._generation = generation
        self._tick_count = 0
        self._timer.start()
        self.started.emit(generation)

    def stop(self) -> None:
        """Stop the clock. No tick of the current arming fires afterwards."""
        was_running = self._timer.isActive()
        self._timer.stop()
        if was_running:
            self.stopped.emit()

    def _on_timeout(self) -> None:
        """Handle a QTimer timeout and forward it as a tick."""
        self._tick_count += 1
        self.tick.emit(self._generation)
