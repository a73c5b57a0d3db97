import requests

from typing import Callable, Dict, Optional
from urllib.parse import urlparse

from deployer.config import HTTP_REQUEST_METHOD, HTTP_TIMEOUT_IN_SECONDS
from deployer.exceptions import UnknownFieldError
from deployer.models import ValidationVerdict


NOT_A_VALID_URL = "Not a valid URL"
NOT_RESPONDING = "URL did not return a 200 response."


def is_url(url: Optional[str]) -> bool:
    """
    Чисто синтаксическая проверка: схема + хост, без обращения к сети.
    """
    if not url:
        return False

    try:
        parsed = urlparse(url)
        # .port бросает ValueError на мусоре вроде http://host:abc
        parsed.port
    except ValueError:
        return False

    return bool(parsed.scheme) and parsed.scheme.isalpha() and bool(parsed.hostname)


def returns_200_response(url: str, timeout: float = HTTP_TIMEOUT_IN_SECONDS) -> bool:
    """
    Один HEAD-запрос с таймаутом; ответ 2xx — адрес живой.
    Соединение закрывается на любом исходе.
    """
    try:
        with requests.request(
            HTTP_REQUEST_METHOD,
            url,
            timeout=timeout,
            allow_redirects=True,
        ) as response:
            return 200 <= response.status_code < 300
    except requests.exceptions.RequestException:
        # проблема с соединением, таймаут, неподдерживаемая схема
        return False


def validate_url(url: Optional[str], timeout: float = HTTP_TIMEOUT_IN_SECONDS) -> ValidationVerdict:
    if not is_url(url):
        return ValidationVerdict.error(NOT_A_VALID_URL)
    if not returns_200_response(url, timeout=timeout):
        return ValidationVerdict.warning(NOT_RESPONDING)
    return ValidationVerdict.ok()


def _always_ok(value: Optional[str]) -> ValidationVerdict:
    return ValidationVerdict.ok()


FIELD_VALIDATORS: Dict[str, Callable[[Optional[str]], ValidationVerdict]] = {
    "url": validate_url,
    "uri": validate_url,
    "appid": _always_ok,
    "docker": _always_ok,
    "label_name": _always_ok,
    "label_value": _always_ok,
}


def validate_field(field_name: str, value: Optional[str]) -> ValidationVerdict:
    """
    Проверка одного поля формы шага деплоя.

    :raises UnknownFieldError: если такого поля нет.
    """
    validator = FIELD_VALIDATORS.get(field_name)
    if validator is None:
        raise UnknownFieldError(field_name)
    return validator(value)
