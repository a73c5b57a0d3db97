import functools
import asyncio
from typing import Dict, Iterable


def async_click(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return asyncio.run(func(*args, **kwargs))
    return wrapper


def parse_pairs(pairs: Iterable[str], option: str = "--build-var") -> Dict[str, str]:
    """
    Разбирает пары вида NAME=VALUE из повторяющейся опции CLI.
    Значение может содержать '=', имя — нет.
    """
    result: Dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"{option} ожидает NAME=VALUE, получено {pair!r}")
        result[name] = value
    return result
