"""
playback.py — Timed Step Playback
==================================
The PlaybackController is the ONLY object that moves a Run's cursor.
It replays a materialised Step sequence at a chosen speed, hands every
Step to an `on_step(step, index)` callback, and can be stopped at any
moment.  It also offers manual next / prev / goto navigation.

Scheduling:
    One daemon worker thread per playback runs a plain loop:

        deliver step 0
        for every following step:
            stop if cancelled
            wait delay_ms on the cancel event   ← the only suspension point
            deliver the step

    Waiting on the handle's cancel Event (instead of time.sleep) means a
    cancel() wakes the loop immediately, and the flag is read live on
    every iteration rather than captured once when the loop starts.

State machine (PlaybackHandle.state):
    RUNNING  →  last step delivered  →  FINISHED
    RUNNING  →  cancel()             →  CANCELLED
    RUNNING  →  on_step raised       →  FAILED

Re-entrancy:
    play() first cancels and joins whatever is still playing on this
    controller, so two sequences never drive the same view concurrently.
    Concurrent play() calls are serialised; the last one wins and every
    earlier handle ends CANCELLED.

    on_step may itself call play() or stop().  The calling worker cannot
    join itself, so its current callback finishes while the new loop is
    already delivering step 0; the old loop then exits without delivering
    anything else.  A callback must not call play() while another thread
    is inside play() for the same controller: that thread is joining the
    worker and the two would wait on each other.
"""

import threading
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Union

from algorithms.step import Step
from engine.run import Run, RunStatus
from shared.logger import get_logger

logger = get_logger(__name__)

OnStep = Callable[[Step, int], None]


# ---------------------------------------------------------------------------
# Speed (percent of max speed; 100 % → 100 ms per step, 10 % → 1090 ms)
# ---------------------------------------------------------------------------
MIN_SPEED = 10
MAX_SPEED = 100

SPEED_PRESETS: Dict[str, int] = {
    "slow":   10,    # teaching mode
    "medium": 50,
    "fast":   90,
    "max":    100,
}


def delay_for_speed(speed_percent: int) -> int:
    """Inter-step delay in milliseconds for a speed percentage."""
    if isinstance(speed_percent, bool) or not isinstance(speed_percent, int):
        raise TypeError(f"Speed must be an int percentage, got {speed_percent!r}")
    if not MIN_SPEED <= speed_percent <= MAX_SPEED:
        raise ValueError(
            f"Speed must be between {MIN_SPEED} and {MAX_SPEED}, got {speed_percent}"
        )
    return 1100 - speed_percent * 10


def resolve_speed(speed: Union[int, str]) -> int:
    """Accept a percentage or a preset name; return a validated percentage."""
    if isinstance(speed, str):
        if speed not in SPEED_PRESETS:
            raise ValueError(
                f"Unknown speed preset {speed!r}; expected one of {sorted(SPEED_PRESETS)}"
            )
        speed = SPEED_PRESETS[speed]
    delay_for_speed(speed)
    return speed


class PlaybackState(Enum):
    RUNNING   = "running"
    FINISHED  = "finished"
    CANCELLED = "cancelled"
    FAILED    = "failed"


# ---------------------------------------------------------------------------
# Handle returned by play()
# ---------------------------------------------------------------------------
class PlaybackHandle:
    """
    Attributes:
        total         : Number of steps this playback will deliver.
        speed_percent : Speed it was started with.
        delay_ms      : Pause between consecutive steps.
        delivered     : Steps handed to on_step so far.
        state         : PlaybackState.
        error         : Exception raised by on_step, if any.
    """

    def __init__(self, total: int, speed_percent: int):
        self.total:         int                 = total
        self.speed_percent: int                 = speed_percent
        self.delay_ms:      int                 = delay_for_speed(speed_percent)
        self.delivered:     int                 = 0
        self.state:         PlaybackState       = PlaybackState.RUNNING
        self.error:         Optional[Exception] = None

        self._cancel = threading.Event()
        self._done   = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def cancel(self) -> bool:
        """
        Ask the loop to stop.  Returns False when playback had already
        ended, in which case nothing changes.
        """
        if self._done.is_set():
            return False
        self._cancel.set()
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the loop has exited.  True if it did within `timeout`."""
        return self._done.wait(timeout)

    def join(self) -> None:
        """
        Wait for the worker thread.  A no-op before the thread has started,
        and from inside on_step (the worker cannot join itself: the old
        loop finishes its current callback and exits on its own).
        """
        thread = self._thread
        if thread is None or thread.ident is None or thread is threading.current_thread():
            return
        thread.join()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def is_running(self) -> bool:
        return not self._done.is_set()

    @property
    def is_finished(self) -> bool:
        return self._done.is_set() and self.state == PlaybackState.FINISHED


# ---------------------------------------------------------------------------
# PlaybackController
# ---------------------------------------------------------------------------
class PlaybackController:

    def __init__(self):
        self._lock      = threading.Lock()
        self._swap_lock = threading.Lock()
        self._active: Optional[PlaybackHandle] = None
        self._count = 0

    # ------------------------------------------------------------------
    # Timed playback
    # ------------------------------------------------------------------
    def play(
        self,
        steps: Sequence[Step],
        speed_percent: int,
        on_step: OnStep,
        on_done: Optional[Callable[[PlaybackHandle], None]] = None,
    ) -> PlaybackHandle:
        """
        Deliver `steps` to `on_step(step, index)` in order, pausing
        `1100 - speed_percent * 10` ms between consecutive steps.
        Returns immediately with a handle; call handle.cancel() to stop.
        """
        steps  = list(steps)
        handle = PlaybackHandle(total=len(steps), speed_percent=speed_percent)

        # one play() at a time: cancel/join the old loop, start the new one,
        # then publish it, all before another caller can get in
        with self._swap_lock:
            self.stop()

            with self._lock:
                self._count += 1
                name = f"playback-{self._count}"
            thread = threading.Thread(
                target=self._loop,
                args=(handle, steps, on_step, on_done),
                name=name,
                daemon=True,
            )
            handle._thread = thread

            logger.debug("Playback started: %d steps at %d%% (%d ms)",
                         handle.total, speed_percent, handle.delay_ms)
            thread.start()

            # only a started thread is ever visible to stop()
            with self._lock:
                if handle.is_running:
                    self._active = handle
        return handle

    def play_run(
        self,
        run: Run,
        speed_percent: int,
        on_step: Optional[OnStep] = None,
    ) -> PlaybackHandle:
        """
        Play a Run from its cursor (from the start once it has finished),
        keeping `run.cursor` and `run.status` up to date.

        A Run with `error` set (unsupported selector) or with no steps has
        nothing to play: ValueError, and the Run is left as it was.
        """
        delay_for_speed(speed_percent)
        if run.error is not None:
            raise ValueError(run.error)
        if not run.steps:
            raise ValueError("Run has no steps to play")
        self.stop()

        start = run.cursor
        if run.status == RunStatus.FINISHED or not 0 <= start < len(run.steps):
            start = 0
        run.status = RunStatus.RUNNING

        def deliver(step: Step, offset: int) -> None:
            run.cursor = start + offset
            if on_step is not None:
                on_step(step, start + offset)

        def done(handle: PlaybackHandle) -> None:
            if handle.state == PlaybackState.FINISHED:
                run.status = RunStatus.FINISHED
            else:
                run.status = RunStatus.IDLE

        return self.play(run.steps[start:], speed_percent, deliver, on_done=done)

    def stop(self) -> bool:
        """Cancel and wait out the active playback.  False if nothing was playing."""
        with self._lock:
            active, self._active = self._active, None
        if active is None:
            return False
        stopped = active.cancel()
        active.join()
        if stopped:
            logger.info("Playback cancelled after %d/%d steps", active.delivered, active.total)
        return stopped

    @property
    def active(self) -> Optional[PlaybackHandle]:
        with self._lock:
            return self._active

    @property
    def is_playing(self) -> bool:
        handle = self.active
        return handle is not None and handle.is_running

    # ------------------------------------------------------------------
    # Manual navigation (stops auto-play first)
    # ------------------------------------------------------------------
    def next_step(self, run: Run, on_step: Optional[OnStep] = None) -> Optional[Step]:
        """Advance one step.  Returns None if already at the end."""
        self.stop()
        if run.cursor + 1 >= len(run.steps):
            if run.steps:
                run.status = RunStatus.FINISHED
            return None
        return self._goto(run, run.cursor + 1, on_step)

    def prev_step(self, run: Run, on_step: Optional[OnStep] = None) -> Optional[Step]:
        """Rewind one step.  Returns None if already at the start."""
        self.stop()
        if run.cursor <= 0 or not run.steps:
            return None
        return self._goto(run, run.cursor - 1, on_step)

    def goto_step(self, run: Run, idx: int, on_step: Optional[OnStep] = None) -> Optional[Step]:
        """Jump to an arbitrary step.  Returns None if `idx` is out of range."""
        self.stop()
        if not 0 <= idx < len(run.steps):
            return None
        return self._goto(run, idx, on_step)

    def rewind(self, run: Run, on_step: Optional[OnStep] = None) -> Optional[Step]:
        return self.goto_step(run, 0, on_step)

    def jump_to_end(self, run: Run, on_step: Optional[OnStep] = None) -> Optional[Step]:
        return self.goto_step(run, len(run.steps) - 1, on_step)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, run: Run, idx: int, on_step: Optional[OnStep]) -> Step:
        run.cursor = idx
        run.status = RunStatus.FINISHED if idx == len(run.steps) - 1 else RunStatus.IDLE
        step = run.steps[idx]
        if on_step is not None:
            on_step(step, idx)
        return step

    def _loop(
        self,
        handle: PlaybackHandle,
        steps: Sequence[Step],
        on_step: OnStep,
        on_done: Optional[Callable[[PlaybackHandle], None]],
    ) -> None:
        delay_s = handle.delay_ms / 1000.0
        try:
            for idx, step in enumerate(steps):
                if handle.cancelled:
                    break
                # Event.wait returns True as soon as cancel() is called
                if idx > 0 and handle._cancel.wait(delay_s):
                    break
                on_step(step, idx)
                handle.delivered = idx + 1
        except Exception as exc:
            logger.exception("on_step failed at step %d/%d", handle.delivered, handle.total)
            handle.error = exc
            handle.state = PlaybackState.FAILED
        else:
            if handle.delivered == handle.total:
                handle.state = PlaybackState.FINISHED
                logger.debug("Playback finished: %d steps", handle.total)
            else:
                handle.state = PlaybackState.CANCELLED
        finally:
            with self._lock:
                if self._active is handle:
                    self._active = None
            try:
                if on_done is not None:
                    on_done(handle)
            finally:
                handle._done.set()
