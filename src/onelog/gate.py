"""One-shot gate: lets an action run at most once until re-armed."""

import threading


class OneShotGate:
    """Atomic test-and-set flag with its own lock.

    ``try_fire()`` returns True for exactly one caller per armed period, no
    matter how many threads race on it; every other caller gets False.
    Independent of any lock the guarded action itself takes.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._fired = False

    @property
    def fired(self) -> bool:
        with self._lock:
            return self._fired

    def try_fire(self) -> bool:
        """Flip ARMED to FIRED. True only for the caller that flipped it."""
        with self._lock:
            if self._fired:
                return False
            self._fired = True
            return True

    def reset(self) -> None:
        """Re-arm the gate."""
        with self._lock:
            self._fired = False
