"""枚举定义

SchedulerState：周期任务的两个状态，IDLE（等待下一次触发）与 RUNNING（执行一次上报）。
"""

from enum import StrEnum


class SchedulerState(StrEnum):
    """周期任务状态

    IDLE -> RUNNING：定时器触发
    RUNNING -> IDLE：本次执行结束（成功或异常被捕获）
    进程存活期间没有终态。
    """

    IDLE = "IDLE"
    RUNNING = "RUNNING"
