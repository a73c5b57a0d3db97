from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class BuildOutcome(str, Enum):
    """
    Итоговый статус сборки. NONE — результата ещё нет
    (post-step выполняется до финализации сборки).
    """
    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"
    NOT_BUILT = "NOT_BUILT"
    ABORTED = "ABORTED"
    NONE = "NONE"


class MarathonUri(BaseModel):
    model_config = ConfigDict(frozen=True)

    uri: str


class MarathonLabel(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: str = ""


class TriggerConfig(BaseModel):
    """
    Настройки шага деплоя, задаются один раз при описании job'а.

    url        — адрес Marathon, обязателен;
    app_id     — переопределяет id приложения из marathon.json;
    docker     — переопределяет docker-образ;
    uris       — дополнительные URI для скачивания в sandbox;
    labels     — дополнительные labels приложения;
    run_failed — деплоить даже упавшую сборку.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str
    app_id: Optional[str] = Field(default=None, alias="appid")
    docker: Optional[str] = None
    uris: List[MarathonUri] = Field(default_factory=list)
    labels: List[MarathonLabel] = Field(default_factory=list)
    run_failed: bool = False

    @field_validator("url")
    @classmethod
    def _url_not_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("url is required")
        return value.strip()


class VerdictKind(str, Enum):
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


class ValidationVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: VerdictKind
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationVerdict":
        return cls(kind=VerdictKind.OK)

    @classmethod
    def warning(cls, message: str) -> "ValidationVerdict":
        return cls(kind=VerdictKind.WARNING, message=message)

    @classmethod
    def error(cls, message: str) -> "ValidationVerdict":
        return cls(kind=VerdictKind.ERROR, message=message)


class UpdateResult(BaseModel):
    """
    Результат вызова обновления приложения в Marathon.
    ok=False — Marathon отклонил дескриптор, message содержит его ответ.
    """
    ok: bool
    app_id: str
    status_code: Optional[int] = None
    deployment_id: Optional[str] = None
    message: Optional[str] = None


class RunResult(BaseModel):
    deployed: bool
    final_status: BuildOutcome
    succeeded: bool
    update: Optional[UpdateResult] = None
    warnings: List[str] = []
    logs: List[str] = []
