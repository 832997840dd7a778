"""同步进度流解码 - 按换行切分帧并解析 JSON."""

import codecs
import inspect
import json
import logging
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

FRAME_DELIMITER = "\n"

EventHandler = Callable[[Any], Awaitable[None] | None]


class FrameDecoder:
    """增量帧解码器.

    字节块可能在任意位置被截断（包括多字节 UTF-8 字符中间），
    只有遇到分隔符的帧才算完整。
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """尚未遇到分隔符的残留文本."""
        return self._buffer

    def feed(self, chunk: bytes) -> list[str]:
        """追加一个字节块，返回其中所有完整的帧."""
        self._buffer += self._decoder.decode(chunk)

        *frames, self._buffer = self._buffer.split(FRAME_DELIMITER)
        return frames

    def finish(self) -> str:
        """结束解码，丢弃并返回残留的不完整帧."""
        self._buffer += self._decoder.decode(b"", final=True)
        remainder, self._buffer = self._buffer, ""
        return remainder


async def iter_frames(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """按到达顺序逐个产出完整的文本帧."""
    decoder = FrameDecoder()
    async for chunk in chunks:
        for frame in decoder.feed(chunk):
            yield frame

    # 流结束时的残留部分无法与截断区分，直接丢弃
    remainder = decoder.finish()
    if remainder.strip():
        logger.debug(f"丢弃不完整的尾帧: {remainder[:80]!r}")


def parse_frame(frame: str) -> tuple[bool, Any]:
    """解析单个帧，返回 (是否有效, 事件)."""
    text = frame.strip()
    if not text:
        return False, None

    try:
        return True, json.loads(text)
    except (ValueError, RecursionError):
        # 超长整数、嵌套过深等同样视为无效帧
        logger.debug(f"忽略无法解析的帧: {text[:80]!r}")
        return False, None


async def consume_events(
    chunks: AsyncIterable[bytes],
    on_event: EventHandler,
) -> int:
    """
    消费进度流，对每个有效事件调用回调.

    空行和无效 JSON 帧会被跳过；回调自身抛出的异常照常向上传播。

    Returns:
        int: 已分发的事件数量
    """
    dispatched = 0
    async for frame in iter_frames(chunks):
        ok, event = parse_frame(frame)
        if not ok:
            continue

        result = on_event(event)
        if inspect.isawaitable(result):
            await result
        dispatched += 1

    return dispatched
