"""定时任务定义."""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from feedsync.config import Settings
from feedsync.core.sync import FeedSyncService

logger = logging.getLogger(__name__)

_scheduler: AsyncIOScheduler | None = None


async def sync_task(service: FeedSyncService) -> None:
    """后台同步任务：不刷新用户当前的可见列表."""
    logger.info("开始后台同步任务...")
    ok = await service.sync_all_feeds(user_initiated=False)
    logger.info(f"后台同步结束: {'成功' if ok else '失败'}")


def create_scheduler(
    settings: Settings,
    service: FeedSyncService,
) -> AsyncIOScheduler | None:
    """创建并启动定时任务调度器."""
    global _scheduler

    if not settings.reader_url:
        logger.warning("阅读器服务端未配置，跳过定时同步")
        return None

    _scheduler = AsyncIOScheduler()

    _scheduler.add_job(
        sync_task,
        "interval",
        minutes=settings.sync_interval_minutes,
        args=[service],
        id="sync_task",
        name="订阅源定时同步",
        replace_existing=True,
    )

    # 启动时立即执行一次同步
    if settings.sync_on_startup:
        _scheduler.add_job(
            sync_task,
            "date",  # 一次性任务
            args=[service],
            id="sync_task_initial",
            name="启动同步",
        )

    _scheduler.start()
    logger.info(
        f"定时任务调度器已启动，同步间隔: {settings.sync_interval_minutes} 分钟"
    )

    return _scheduler


async def shutdown_scheduler() -> None:
    """关闭定时任务调度器."""
    global _scheduler
    if _scheduler:
        _scheduler.shutdown(wait=False)
        logger.info("定时任务调度器已关闭")
        _scheduler = None
