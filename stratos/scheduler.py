"""Simple tick-driven task scheduler.

A timer calls :meth:`Scheduler.tick` once per scheduler tick. The tick
handler decides which task is due and marks it for execution. The main loop
(:meth:`Scheduler.step` / :meth:`Scheduler.run`) then runs that task, which
keeps the work done inside the timer callback small.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from stratos.timer import TimerError

log = logging.getLogger(__name__)

MAX_TASKS = 20
"""Maximum number of tasks searched when killing a task."""

MAX_REGISTERED_TASKS = MAX_TASKS * 2
"""Maximum number of tasks that can ever be registered."""

DEFAULT_TICK_US = 1000
US_PER_MS = 1000


class SchedulerError(Exception):
    """Raised when the scheduler cannot carry out a request."""


class SchedulerState(Enum):
    """States of the scheduler state machine."""

    INIT = "init"
    IDLE = "idle"
    TASK_OVERRUN = "task_overrun"
    EXECUTE_TASK = "execute_task"
    SCHEDULE_TASKS = "schedule_tasks"


@dataclass(eq=False)
class UserTask:
    """A task definition: its period and the function to run.

    ``id`` is assigned by the scheduler on registration. Its value carries no
    meaning beyond identifying the task to the scheduler.
    """

    period_ms: int
    task_func: Optional[Callable[[], Any]]
    id: Optional[int] = None


@dataclass(eq=False)
class _TaskControlBlock:
    usr_tsk: UserTask
    alive: bool = True
    active: bool = False
    scheduled: bool = False
    active_tick: int = 0
    cycle_end_tick: int = 0


class Scheduler:
    """Runs registered tasks at their periods, driven by a system timer."""

    def __init__(
        self,
        timer_alloc: Callable[[Callable[[], Any], int], Any],
        tick_us: int = DEFAULT_TICK_US,
    ) -> None:
        if tick_us <= 0:
            raise ValueError(f"tick length must be positive, got {tick_us}")
        self._timer_alloc = timer_alloc
        self._tick_us = tick_us
        self._initialized = False
        self._reset()

    def _reset(self) -> None:
        self._tasks: list[_TaskControlBlock] = []
        self._is_running = False
        self._booting = True
        self._system_tick = 0
        self._task_id_count = 0
        self._state = SchedulerState.INIT
        self._task_head: Optional[_TaskControlBlock] = None
        self._timer_id: Any = None

    @property
    def ms_per_tick(self) -> int:
        return self._tick_us // US_PER_MS

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def system_tick(self) -> int:
        return self._system_tick

    @property
    def registered_count(self) -> int:
        return len(self._tasks)

    @property
    def current_task(self) -> Optional[UserTask]:
        """The task most recently set up to run, if any."""
        return None if self._task_head is None else self._task_head.usr_tsk

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self, tasks: Optional[Iterable[UserTask]] = None) -> None:
        """Reset the scheduler, register ``tasks`` and allocate its timer."""
        self._initialized = True
        self._reset()

        for task in tasks or ():
            try:
                self.register_task(task)
            except SchedulerError as exc:
                log.warning("%s", exc)

        try:
            self._timer_id = self._timer_alloc(self.tick, self._tick_us)
        except TimerError as exc:
            raise SchedulerError(
                "failed to allocate a system timer, cannot run scheduler"
            ) from exc

    def register_task(self, task: UserTask) -> int:
        """Register ``task`` and return the id assigned to it."""
        if task is None or task.task_func is None:
            raise SchedulerError(
                f"failed to register task: task_null={task is None}, "
                f"task_func_null={task is None or task.task_func is None}"
            )
        if self._task_id_count >= MAX_REGISTERED_TASKS:
            raise SchedulerError(
                f"failed to register task: at most {MAX_REGISTERED_TASKS} "
                "tasks can be registered"
            )

        self._tasks.append(_TaskControlBlock(usr_tsk=task))
        task.id = self._task_id_count
        self._task_id_count += 1
        return task.id

    def kill_task(self, task_id: int) -> None:
        """Mark the task with ``task_id`` as no longer alive."""
        for block in self._tasks[:MAX_TASKS]:
            if block.usr_tsk.id == task_id:
                block.active = False
                block.alive = False
                return
        raise SchedulerError(f"no task with id {task_id} to kill")

    def activate_task(self, task_id: int) -> None:
        """Activate a task; this scheduler does not support activation."""
        raise SchedulerError(f"cannot activate task {task_id}: not supported")

    def _setup_task_to_run(self, block: _TaskControlBlock) -> None:
        self._task_head = block
        block.active_tick = self._system_tick
        block.scheduled = True
        self._state = SchedulerState.EXECUTE_TASK

    def tick(self) -> None:
        """Advance one scheduler tick and schedule whatever task is due."""
        self._system_tick += 1
        head = self._task_head

        if not self._booting and head is not None and not head.scheduled:
            for block in self._tasks:
                if self._system_tick >= block.active_tick + block.usr_tsk.period_ms:
                    self._setup_task_to_run(block)
        elif self._booting:
            first_alive = next((b for b in self._tasks if b.alive), None)
            if first_alive is not None:
                self._setup_task_to_run(first_alive)
                self._booting = False

        if self._state is SchedulerState.EXECUTE_TASK:
            head = self._task_head
            elapsed_ms = (self._system_tick - head.active_tick) * self.ms_per_tick
            if elapsed_ms > head.usr_tsk.period_ms:
                self._state = SchedulerState.TASK_OVERRUN
                log.warning(
                    "Task overrun has occurred on task with id=%s. "
                    "Consider lengthening period_ms on task registration.",
                    head.usr_tsk.id,
                )

    def step(self) -> None:
        """Run one pass of the main loop: execute the queued task, if any."""
        if not self._initialized:
            raise SchedulerError("scheduler was not initialized; call init() first")
        if self._state is SchedulerState.EXECUTE_TASK:
            self._call_task(self._task_head)
            self._state = SchedulerState.IDLE

    def run(self, stop: Callable[[], bool]) -> None:
        """Run the main loop until ``stop()`` returns true."""
        if not self._initialized:
            log.warning(
                "Scheduler was not initialized before control was passed to it; "
                "scheduler will not run"
            )
            return
        self._is_running = False
        while not stop():
            self.step()

    def _call_task(self, block: Optional[_TaskControlBlock]) -> None:
        if block is None:
            log.warning("Tried to execute a missing task")
            return
        if block.usr_tsk.task_func is None:
            log.warning("Tried to execute a task with a missing task_func")
        else:
            if not block.scheduled:
                log.warning("Invalid state: only scheduled tasks should be executed")
            block.usr_tsk.task_func()
        block.scheduled = False
        block.cycle_end_tick = self._system_tick