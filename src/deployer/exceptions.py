from typing import List, Optional

from exception import CLIException


class DeployExceptions(CLIException):
    """
    Базовое исключение шага деплоя.

    Дополнительно хранит логи (steps), накопленные во время операции.
    """

    def __init__(
        self,
        *args,
        description: str = "Something happend while deploying to Marathon",
        logs: Optional[List[str]] = None,
    ) -> None:
        super().__init__(*args, description=description)
        self.logs: List[str] = logs or []


class DescriptorError(DeployExceptions):
    """
    marathon.json не найден, не читается или после сборки в нём нет id.
    """

    def __init__(
        self,
        path: str,
        reason: str,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = f"Error to build Marathon descriptor {path}: {reason}"
        super().__init__(*args, description=description, logs=logs)
        self.path = path
        self.reason = reason


class UnknownFieldError(DeployExceptions):
    """
    Запрошена проверка поля, которого нет в форме шага деплоя.
    """

    def __init__(self, field_name: str, *args) -> None:
        description = f"Unknown field {field_name!r}"
        super().__init__(*args, description=description)
        self.field_name = field_name
