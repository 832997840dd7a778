"""阅读器服务端 API 客户端."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class ReaderConfig:
    """阅读器服务端连接配置."""

    base_url: str
    sync_path: str = "/api/feeds/sync-all"
    articles_path: str = "/api/articles"
    timeout: float = 30.0
    # 服务端在所有订阅源完成前可能长时间不返回数据，None 表示不限制
    stream_read_timeout: float | None = None


class ReaderAPIError(Exception):
    """阅读器服务端 API 错误."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


async def _error_message(response: httpx.Response, default: str) -> str:
    """从错误响应中提取 error 字段."""
    try:
        await response.aread()
        data = response.json()
    except (httpx.HTTPError, ValueError):
        return default

    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return default


class ReaderClient:
    """阅读器服务端客户端."""

    def __init__(
        self,
        config: ReaderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            timeout=config.timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """关闭客户端."""
        await self._client.aclose()

    @asynccontextmanager
    async def stream_sync(self) -> AsyncIterator[AsyncIterator[bytes]]:
        """触发全部订阅源同步，产出进度流的字节块迭代器."""
        timeout = httpx.Timeout(
            self.config.timeout,
            read=self.config.stream_read_timeout,
        )
        async with self._client.stream(
            "POST", self.config.sync_path, timeout=timeout
        ) as response:
            if response.is_error:
                message = await _error_message(response, "Failed to sync feeds")
                raise ReaderAPIError(message, response.status_code)

            yield response.aiter_bytes()

    async def get_articles(
        self,
        feed_id: str | int | None = None,
        unread_only: bool = False,
    ) -> list[dict[str, Any]]:
        """获取文章列表."""
        params: dict[str, str] = {}
        if feed_id is not None:
            params["feedId"] = str(feed_id)
        if unread_only:
            params["unreadOnly"] = "true"

        response = await self._client.get(self.config.articles_path, params=params)
        if response.is_error:
            message = await _error_message(response, "Failed to fetch articles")
            raise ReaderAPIError(message, response.status_code)

        data = response.json()
        if not isinstance(data, list):
            msg = "文章列表响应格式错误：应为 JSON 数组"
            raise ReaderAPIError(msg, response.status_code)

        return data
