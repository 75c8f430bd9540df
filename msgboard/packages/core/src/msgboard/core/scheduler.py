"""FixedDelayScheduler -- 固定延迟周期任务

间隔从上一次执行结束开始计算（fixed-delay，而非 fixed-rate）：
执行耗时 5 秒、延迟 60 秒时，下一次在上一次开始后 65 秒启动。
同一时刻最多只有一次执行；单次执行抛出的异常被捕获并记录，不会中断后续调度。
"""

import asyncio
import contextlib
import time
from collections.abc import Awaitable, Callable

import structlog

from .models.enums import SchedulerState

log = structlog.get_logger()


class FixedDelayScheduler:
    """固定延迟调度器 -- 单个 asyncio.Task 内的 "执行 -> 等待" 循环

    启动后立即执行第一次，之后每次执行结束再等待 delay_s。
    clock / sleep 可注入，便于测试时模拟时间流逝。
    """

    def __init__(
        self,
        job: Callable[[], Awaitable[object]],
        delay_s: float,
        *,
        name: str = "scheduled_job",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger=None,
    ) -> None:
        """
        Args:
            job: 每次触发执行的协程函数
            delay_s: 上一次执行结束到下一次执行开始的间隔（秒）
            name: 任务名称（日志与 asyncio.Task 名称）
            clock: 单调时钟
            sleep: 等待函数
            logger: structlog logger，默认模块 logger
        """
        if delay_s < 0:
            raise ValueError("delay_s must not be negative")
        self._job = job
        self._delay_s = delay_s
        self._name = name
        self._clock = clock
        self._sleep = sleep
        self._log = logger or log
        self._state = SchedulerState.IDLE
        self._task: asyncio.Task | None = None

        self.run_count = 0
        self.failure_count = 0
        self.last_started_at: float | None = None
        self.last_finished_at: float | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def delay_s(self) -> float:
        return self._delay_s

    @property
    def state(self) -> SchedulerState:
        """当前状态：IDLE 或 RUNNING"""
        return self._state

    @property
    def is_started(self) -> bool:
        """后台循环是否存活"""
        return self._task is not None and not self._task.done()

    async def run_once(self) -> None:
        """执行一次 job，异常被捕获并记录（CancelledError 除外）"""
        self._state = SchedulerState.RUNNING
        self.last_started_at = self._clock()
        try:
            await self._job()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.failure_count += 1
            self._log.error(
                "scheduled_job_failed",
                job=self._name,
                error=str(e),
                exc_info=True,
            )
        finally:
            self.last_finished_at = self._clock()
            self.run_count += 1
            self._state = SchedulerState.IDLE

    async def run_forever(self) -> None:
        """执行 -> 等待 delay_s -> 执行 ...，直到被取消"""
        self._log.info("scheduler_started", job=self._name, delay_s=self._delay_s)
        try:
            while True:
                await self.run_once()
                await self._sleep(self._delay_s)
        finally:
            self._log.info("scheduler_stopped", job=self._name, runs=self.run_count)

    def start(self) -> None:
        """启动后台循环（已在运行时不重复启动）"""
        if self.is_started:
            return
        self._task = asyncio.create_task(self.run_forever(), name=self._name)

    async def stop(self) -> None:
        """取消后台循环并等待其退出"""
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        self._state = SchedulerState.IDLE
