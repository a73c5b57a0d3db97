import asyncio
import inspect
import threading
import time
import sys
from typing import Any, Callable, TextIO, TypeVar

T = TypeVar("T")


async def run(
    func: Callable[..., Any],
    *args: Any,
    text: str = "Деплой",
    interval: float = 0.1,
    stream: TextIO | None = None,
    **kwargs: Any,
) -> T:
    """
    Запускает func и крутит спиннер в ОТДЕЛЬНОМ потоке, пока она не завершится.
    Синхронная func уходит в asyncio.to_thread. Если stream не терминал
    (CI-лог, перенаправление в файл), спиннер не рисуется.
    """
    stream = stream or sys.stderr

    async def call() -> T:
        if inspect.iscoroutinefunction(func):
            return await func(*args, **kwargs)
        return await asyncio.to_thread(func, *args, **kwargs)

    if not stream.isatty():
        return await call()

    spinner_chars = "|/-\\"
    stop_event = threading.Event()

    def spinner():
        i = 0
        while not stop_event.is_set():
            frame = spinner_chars[i % len(spinner_chars)]
            stream.write(f"\r{text} {frame}")
            stream.flush()
            i += 1
            time.sleep(interval)

    thread = threading.Thread(target=spinner, daemon=True)
    thread.start()

    success = False

    try:
        result = await call()
        success = True
        return result
    finally:
        stop_event.set()
        await asyncio.to_thread(thread.join)

        stream.write("\r" + " " * (len(text) + 2) + "\r")
        if success:
            stream.write(f"{text} - ✅ Готово\n")
        else:
            stream.write(f"{text} - ❌ Ошибка\n")
        stream.flush()
