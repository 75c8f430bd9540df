"""CLI 入口模块 -- python -m msgboard.core <command>

支持的命令：
  report  对写入示例数据的 store 执行一次统计并打印日志块
"""

import asyncio
import sys

from .config import get_report_interval_s, get_report_recent_days


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m msgboard.core <command>")
        print("命令:")
        print("  report  打印一次消息统计")
        sys.exit(1)

    command = sys.argv[1]

    if command == "report":
        asyncio.run(report())
    else:
        print(f"未知命令: {command}")
        print("可用命令: report")
        sys.exit(1)


async def report() -> None:
    """对示例数据执行一次统计"""
    from .reporter import collect_statistics, render_report
    from .store import create_message_store

    store = await create_message_store(seed=True)
    stats = await collect_statistics(
        store,
        recent_days=get_report_recent_days(),
        interval_s=get_report_interval_s(),
    )
    print(render_report(stats))


if __name__ == "__main__":
    main()
