import click
import re

from pathlib import Path
from pydantic import ValidationError
from typing import Dict, List, Mapping, Optional

from deployer.config import MARATHON_JSON, MARATHON_RENDERED_FALLBACK, MARATHON_RENDERED_JSON
from deployer.exceptions import DescriptorError
from deployer.models import TriggerConfig, UpdateResult
from deployer.services.marathon import MarathonClient
from model import Container, Docker, MarathonApp


MACRO = re.compile(r"\$(\{([A-Za-z_][A-Za-z0-9_.]*)\}|([A-Za-z_][A-Za-z0-9_]*))")


def expand_macros(value: Optional[str], env: Mapping[str, str]) -> Optional[str]:
    """
    Подставляет $VAR и ${VAR} из окружения сборки.
    Неизвестные переменные остаются как есть.
    """
    if not value:
        return value

    def replace(match: re.Match) -> str:
        name = match.group(2) or match.group(3)
        return env.get(name, match.group(0))

    return MACRO.sub(replace, value)


class MarathonBuilder:
    """
    Собирает дескриптор приложения и отправляет его в Marathon:

        MarathonBuilder(config, env, workspace).read().build().to_file().update()

    - read()    — читает marathon.json из рабочей директории;
    - build()   — применяет переопределения из TriggerConfig и раскрывает макросы;
    - to_file() — пишет итоговый дескриптор рядом (marathon-rendered-N.json);
    - update()  — отправляет дескриптор в Marathon, возвращает UpdateResult.
    """

    def __init__(
        self,
        config: TriggerConfig,
        env: Optional[Mapping[str, str]] = None,
        workspace: Optional[Path] = None,
        client: Optional[MarathonClient] = None,
    ) -> None:
        self.config = config
        self.env: Dict[str, str] = dict(env or {})
        self.workspace = Path(workspace or ".")
        self.client = client or MarathonClient(config.url)
        self.app: Optional[MarathonApp] = None
        self.rendered_path: Optional[Path] = None
        self.logs: List[str] = []

    def read(self, filename: Optional[str] = None) -> "MarathonBuilder":
        # None значит marathon.json по умолчанию
        path = self.workspace / (filename or MARATHON_JSON)
        self.logs.append(f"Читаем дескриптор {path}")

        if not path.is_file():
            raise DescriptorError(str(path), "file not found", logs=self.logs)

        try:
            self.app = MarathonApp.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            self.logs.append(str(e))
            raise DescriptorError(str(path), "invalid JSON descriptor", logs=self.logs)

        return self

    def build(self) -> "MarathonBuilder":
        if self.app is None:
            self.app = MarathonApp()

        app = self.app.model_copy(deep=True)
        config = self.config

        if config.app_id:
            app.id = config.app_id

        if config.docker:
            if app.container is None:
                app.container = Container()
            if app.container.docker is None:
                app.container.docker = Docker()
            app.container.docker.image = config.docker

        for marathon_uri in config.uris:
            if marathon_uri.uri not in app.uris:
                app.uris.append(marathon_uri.uri)

        for label in config.labels:
            app.labels[label.name] = label.value

        app.id = expand_macros(app.id, self.env)
        if app.container is not None and app.container.docker is not None:
            app.container.docker.image = expand_macros(app.container.docker.image, self.env)
        app.uris = [expand_macros(uri, self.env) for uri in app.uris]
        app.labels = {
            expand_macros(name, self.env): expand_macros(value, self.env)
            for name, value in app.labels.items()
        }

        if not app.id or not app.id.strip("/"):
            raise DescriptorError(MARATHON_JSON, "application id is empty", logs=self.logs)

        self.app = app
        self.logs.append(f"Дескриптор собран для приложения {app.id}")
        click.echo(f"Дескриптор собран для приложения {app.id}")
        return self

    def to_file(self) -> "MarathonBuilder":
        if self.app is None:
            raise DescriptorError(MARATHON_JSON, "descriptor is not built yet", logs=self.logs)

        if "BUILD_NUMBER" in self.env:
            filename = expand_macros(MARATHON_RENDERED_JSON, self.env)
        else:
            filename = MARATHON_RENDERED_FALLBACK

        self.rendered_path = self.workspace / filename
        try:
            self.rendered_path.write_text(self.app.to_json(), encoding="utf-8")
        except OSError as e:
            self.logs.append(str(e))
            raise DescriptorError(
                str(self.rendered_path), "cannot write rendered descriptor", logs=self.logs
            )
        self.logs.append(f"Итоговый дескриптор сохранён в {self.rendered_path}")
        return self

    def update(self) -> UpdateResult:
        """
        :raises MarathonError: если Marathon недоступен.
        """
        if self.app is None:
            raise DescriptorError(MARATHON_JSON, "descriptor is not built yet", logs=self.logs)

        self.logs.append(f"Обновляем приложение {self.app.id} в {self.client.base_url}")
        click.echo(f"Обновляем приложение {self.app.id} в {self.client.base_url}")
        result = self.client.update_app(self.app)

        if result.ok:
            self.logs.append(
                f"Marathon принял обновление {result.app_id} (deployment {result.deployment_id})."
            )
        else:
            self.logs.append(
                f"Marathon отклонил обновление {result.app_id}: "
                f"{result.status_code} {result.message}"
            )
        return result


def deploy(config: TriggerConfig, env: Mapping[str, str], workspace: Path) -> UpdateResult:
    """
    Полный цикл по умолчанию: marathon.json -> переопределения -> файл -> Marathon.
    """
    with MarathonClient(config.url) as client:
        builder = MarathonBuilder(config, env=env, workspace=workspace, client=client)
        return builder.read().build().to_file().update()
