from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class Docker(BaseModel):
    """
    Секция container.docker дескриптора Marathon.
    Нас интересует только image, остальные поля переносятся как есть.
    """
    model_config = ConfigDict(extra="allow")

    image: Optional[str] = None


class Container(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str = "DOCKER"
    docker: Optional[Docker] = None


class MarathonApp(BaseModel):
    """
    Дескриптор приложения Marathon (marathon.json).

    Описываем только поля, которые переопределяет шаг деплоя;
    всё остальное (cpus, mem, instances, healthChecks, ...) сохраняется
    без изменений и уходит в Marathon как было.
    """
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    container: Optional[Container] = None
    uris: List[str] = Field(default_factory=list)
    labels: Dict[str, str] = Field(default_factory=dict)

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True, indent=2)
