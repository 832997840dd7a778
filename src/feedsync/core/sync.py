"""同步服务 - 触发服务端同步并消费进度流."""

import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from functools import partial
from typing import Any

from pydantic import ValidationError

from feedsync.core.frames import consume_events
from feedsync.core.reader import ReaderClient
from feedsync.models.progress import SyncProgress

logger = logging.getLogger(__name__)

ArticlesSetter = Callable[[list[dict[str, Any]]], Awaitable[None] | None]
ArticlesRefresher = Callable[[], Awaitable[None] | None]


async def _call(func: Callable[..., Any], *args: Any) -> None:
    """调用同步或异步回调."""
    result = func(*args)
    if inspect.isawaitable(result):
        await result


class FeedSyncService:
    """
    全部订阅源同步.

    流程：触发同步 -> 逐帧消费进度流（每个事件后拉取一次全量文章）
    -> 流结束后再拉取一次全量文章 -> 用户主动触发时刷新可见列表。

    不做重试，也不对并发调用加锁：重叠的两次同步各自执行，
    后写入的快照生效。
    """

    def __init__(
        self,
        client: ReaderClient,
        set_all_articles: ArticlesSetter,
        fetch_articles: ArticlesRefresher,
    ) -> None:
        self.client = client
        self._set_all_articles = set_all_articles
        self._fetch_articles = fetch_articles
        self._syncing = False
        self.last_error: Exception | None = None
        self.last_progress: SyncProgress | None = None
        self.last_synced_at: datetime | None = None

    @property
    def syncing(self) -> bool:
        """是否正在同步."""
        return self._syncing

    async def sync_all_feeds(self, user_initiated: bool = False) -> bool:
        """
        同步全部订阅源.

        所有异常都会被记录而不会抛出，同步是尽力而为的后台操作。
        错误按调用单独收集，结束时写入 last_error（重叠调用互不影响返回值）。

        Args:
            user_initiated: 是否由用户主动触发（只有此时才刷新可见列表）

        Returns:
            bool: 本次同步过程中是否没有出现错误
        """
        self._syncing = True
        errors: list[Exception] = []
        try:
            if await self._consume_stream(errors):
                await self._reconcile(errors)

            if user_initiated:
                try:
                    await _call(self._fetch_articles)
                except Exception as e:
                    logger.exception(f"刷新可见文章列表失败: {e}")
                    errors.append(e)
        except Exception as e:
            logger.exception(f"同步订阅源失败: {e}")
            errors.append(e)
        finally:
            self._syncing = False

        self.last_error = errors[0] if errors else None
        if not errors:
            self.last_synced_at = datetime.now(UTC)
        return not errors

    async def _consume_stream(self, errors: list[Exception]) -> bool:
        """消费进度流，返回是否应继续进行最终拉取."""
        started = False
        try:
            async with self.client.stream_sync() as chunks:
                started = True
                try:
                    count = await consume_events(
                        chunks, partial(self._on_progress, errors=errors)
                    )
                except Exception as e:
                    # 流中断后仍然做最终拉取
                    logger.warning(f"同步进度流中断: {e}")
                    errors.append(e)
                else:
                    logger.info(f"同步进度流结束，共处理 {count} 个事件")
        except Exception as e:
            if not started:
                logger.exception(f"触发同步失败: {e}")
                errors.append(e)
                return False
            # 流已经开始后关闭连接时出错
            logger.warning(f"关闭同步进度流失败: {e}")
        return True

    async def _on_progress(self, event: Any, errors: list[Exception]) -> None:
        """处理单个进度事件：记录进度并拉取全量文章."""
        if isinstance(event, dict):
            try:
                progress = SyncProgress.model_validate(event)
            except ValidationError:
                logger.debug(f"进度事件结构未知: {event}")
            else:
                self.last_progress = progress
                if progress.is_complete:
                    logger.info(
                        f"服务端同步完成: 成功={progress.synced}, "
                        f"失败={progress.failed}, "
                        f"总数={progress.total}"
                    )

        # 事件结构不稳定，直接以服务端全量列表为准
        try:
            articles = await self.client.get_articles()
        except Exception as e:
            logger.warning(f"进度更新时拉取文章失败: {e}")
            errors.append(e)
            return

        await _call(self._set_all_articles, articles)

    async def _reconcile(self, errors: list[Exception]) -> None:
        """最终拉取全量文章并写入."""
        try:
            articles = await self.client.get_articles()
        except Exception as e:
            logger.exception(f"同步后拉取文章失败: {e}")
            errors.append(e)
            return

        await _call(self._set_all_articles, articles)
        logger.info(f"同步后文章总数: {len(articles)}")
