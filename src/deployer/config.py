import os

"""
Базовые настройки деплоя в Marathon.

Всё можно переопределить переменными окружения с префиксом MARATHON_DEPLOY_,
креды Marathon берутся из MARATHON_USER / MARATHON_PASSWORD.
"""

# HEAD-запрос не тянет тело ответа (большие картинки, страницы, ассеты)
HTTP_REQUEST_METHOD = "HEAD"

# таймаут проверки доступности URL, секунды (5 секунд всего)
HTTP_TIMEOUT_IN_SECONDS = float(os.getenv("MARATHON_DEPLOY_PROBE_TIMEOUT", "5"))

# таймаут запроса обновления приложения в Marathon
DEPLOY_TIMEOUT_IN_SECONDS = float(os.getenv("MARATHON_DEPLOY_TIMEOUT", "30"))

MARATHON_JSON = os.getenv("MARATHON_DEPLOY_DESCRIPTOR", "marathon.json")
MARATHON_RENDERED_JSON = "marathon-rendered-${BUILD_NUMBER}.json"
MARATHON_RENDERED_FALLBACK = "marathon-rendered.json"

MARATHON_USER = os.getenv("MARATHON_USER")
MARATHON_PASSWORD = os.getenv("MARATHON_PASSWORD")
