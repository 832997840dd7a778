"""feedsync 主应用入口."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from feedsync import __version__
from feedsync.api import articles, sync
from feedsync.config import Settings, get_settings
from feedsync.core.reader import ReaderClient, ReaderConfig
from feedsync.core.store import ArticleStore
from feedsync.core.sync import FeedSyncService
from feedsync.scheduler import create_scheduler, shutdown_scheduler

# 配置日志
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_services(
    settings: Settings,
) -> tuple[ReaderClient, ArticleStore, FeedSyncService]:
    """根据配置组装客户端、文章状态和同步服务."""
    client = ReaderClient(
        ReaderConfig(
            base_url=settings.reader_url,
            sync_path=settings.sync_path,
            articles_path=settings.articles_path,
            timeout=settings.request_timeout_seconds,
            stream_read_timeout=settings.sync_stream_read_timeout_seconds,
        )
    )
    store = ArticleStore(client)
    service = FeedSyncService(
        client,
        set_all_articles=store.set_all_articles,
        fetch_articles=store.fetch_articles,
    )
    return client, store, service


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """应用生命周期管理."""
    app_settings = get_settings()

    logger.info(f"正在连接阅读器服务端: {app_settings.reader_url or '(未配置)'}")
    client, store, service = build_services(app_settings)
    app.state.article_store = store
    app.state.sync_service = service

    logger.info("正在启动定时任务...")
    create_scheduler(app_settings, service)

    logger.info("feedsync 启动完成！")
    yield

    # 关闭时清理
    logger.info("正在关闭...")
    await shutdown_scheduler()
    await client.close()
    logger.info("feedsync 已关闭")


app = FastAPI(
    title="feedsync",
    description="订阅源同步客户端 - 消费服务端同步进度流并维护本地文章视图",
    version=__version__,
    lifespan=lifespan,
)

# 注册路由
app.include_router(articles.router)
app.include_router(sync.router)


@app.get("/health")
async def health() -> dict:
    """健康检查."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "feedsync.main:app",
        host="127.0.0.1",
        port=8000,
    )
