"""Log file reading and event iteration.

This module is the main integration point: it reads a log file line by line,
decodes every line as JSON and yields the resulting events.
"""

from __future__ import annotations

import asyncio
import gzip
import os
from collections.abc import AsyncIterator, Awaitable, Callable
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .config import JsonReaderConfig, resolve_json_config
from .decoder import JsonDecoder
from .events import build_event
from .models import Event, Message
from .readers import strip_newline


@asynccontextmanager
async def _open_binary(path: Path):
    """Open a log file for async binary reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rb")
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, mode="rb") as f:
            yield f


def _resolve_max_workers(max_workers: int | None) -> int:
    if max_workers is not None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        return max_workers

    env = os.getenv("JSON_LOG_MAX_WORKERS")
    if env:
        try:
            value = int(env)
        except ValueError as exc:
            raise ValueError("JSON_LOG_MAX_WORKERS must be an integer") from exc
        if value < 1:
            raise ValueError("JSON_LOG_MAX_WORKERS must be >= 1")
        return value

    cpu_count = os.cpu_count() or 1
    return min(32, cpu_count)


async def _run_pipeline(
    work_iter: AsyncIterator[tuple[int, Message]],
    *,
    worker_count: int,
    processor: Callable[[Message], Awaitable[Event]],
) -> AsyncIterator[Event]:
    """Process items with worker_count workers and yield results in input order."""
    if worker_count < 1:
        raise ValueError("worker_count must be >= 1")

    queue_size = max(1, worker_count * 4)
    work_queue: asyncio.Queue[tuple[object, Message | None]] = asyncio.Queue(maxsize=queue_size)
    result_queue: asyncio.Queue[tuple[object, Event | None]] = asyncio.Queue(maxsize=queue_size)
    work_sentinel = object()
    done_sentinel = object()
    errors: list[Exception] = []

    async def reader() -> None:
        try:
            async for seq, item in work_iter:
                await work_queue.put((seq, item))
        except Exception as exc:
            errors.append(exc)
        finally:
            for _ in range(worker_count):
                await work_queue.put((work_sentinel, None))

    async def worker() -> None:
        try:
            while True:
                seq, item = await work_queue.get()
                if seq is work_sentinel:
                    break
                event = await processor(item)
                await result_queue.put((seq, event))
        except Exception as exc:
            errors.append(exc)
        finally:
            await result_queue.put((done_sentinel, None))

    reader_task = asyncio.create_task(reader())
    worker_tasks = [asyncio.create_task(worker()) for _ in range(worker_count)]

    pending: dict[int, Event] = {}
    next_seq = 0
    done_workers = 0

    try:
        while True:
            seq, event = await result_queue.get()
            if seq is done_sentinel:
                done_workers += 1
                if done_workers == worker_count:
                    break
                continue

            pending[seq] = event
            while next_seq in pending:
                yield pending.pop(next_seq)
                next_seq += 1

        if errors:
            raise errors[0]
    finally:
        reader_task.cancel()
        for task in worker_tasks:
            task.cancel()
        await asyncio.gather(reader_task, *worker_tasks, return_exceptions=True)


async def iter_messages(log_path: str | Path) -> AsyncIterator[Message]:
    """Yield one Message per non-empty line of the file."""
    path = Path(log_path)
    async with _open_binary(path) as f:
        async for line in f:
            content = strip_newline(line)
            if not content.strip():
                continue
            yield Message(ts=datetime.now(UTC), content=content, size=len(line))


def process_message(message: Message, decoder: JsonDecoder) -> Event:
    """Decode a single message and build its event."""
    return build_event(decoder.apply(message), decoder.config)


async def iter_events(
    log_path: str | Path,
    *,
    config: JsonReaderConfig | None = None,
    max_workers: int | None = None,
) -> AsyncIterator[Event]:
    """Yield decoded events for every line of a JSON log file."""
    path = Path(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")

    decoder = JsonDecoder(resolve_json_config(config))
    max_workers_resolved = _resolve_max_workers(max_workers)
    parallel_ok = max_workers_resolved > 1 and path.suffix.lower() != ".gz"

    if not parallel_ok:
        async for message in iter_messages(path):
            yield process_message(message, decoder)
        return

    loop = asyncio.get_running_loop()

    async def work_iter() -> AsyncIterator[tuple[int, Message]]:
        seq = 0
        async for message in iter_messages(path):
            yield seq, message
            seq += 1

    async def process(message: Message) -> Event:
        return await loop.run_in_executor(executor, process_message, message, decoder)

    executor = ThreadPoolExecutor(max_workers=max_workers_resolved)
    try:
        async for event in _run_pipeline(
            work_iter(),
            worker_count=max_workers_resolved,
            processor=process,
        ):
            yield event
    finally:
        executor.shutdown(wait=True)


async def get_events(
    log_path: str | Path,
    **iter_kwargs,
) -> list[Event]:
    """Collect iter_events into a list."""
    return [event async for event in iter_events(log_path, **iter_kwargs)]
