"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，包含 store 可用性与统计任务运行状态。
"""

import structlog
from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from ..deps import get_book_store, get_message_store, get_statistics_scheduler

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(
    store=Depends(get_message_store),
    book_store=Depends(get_book_store),
    scheduler=Depends(get_statistics_scheduler),
):
    """Readiness 检查 -- 验证核心依赖可用性

    检查项：
    1. store / book_store: 能否完成一次只读查询
    2. statistics_reporter: 统计任务是否在运行（disabled 表示未启用，不影响就绪）
    """
    checks: dict[str, object] = {}
    all_ok = True

    # 1. Store 可用性检查
    try:
        checks["active_messages"] = await store.count_active()
        checks["available_books"] = await book_store.count_available()
        checks["store"] = "ok"
    except Exception as e:
        log.warning("ready_check_store_failed", error=str(e))
        checks["store"] = "unavailable"
        all_ok = False

    # 2. 统计任务检查
    if scheduler is None:
        checks["statistics_reporter"] = "disabled"
    elif scheduler.is_started:
        checks["statistics_reporter"] = scheduler.state.value.lower()
        checks["statistics_runs"] = scheduler.run_count
    else:
        checks["statistics_reporter"] = "stopped"
        all_ok = False

    status_code = 200 if all_ok else 503
    status_text = "ready" if all_ok else "not_ready"

    return JSONResponse(
        status_code=status_code,
        content={
            "status": status_text,
            "checks": checks,
        },
    )
