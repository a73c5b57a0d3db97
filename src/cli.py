import settings
import click
import json

from pathlib import Path
from pydantic import ValidationError

from utils import async_click, parse_pairs
from deployer.animation import run as run_animation
from deployer.core import MarathonRecorder
from deployer.models import BuildOutcome, TriggerConfig, VerdictKind
from deployer.registry import extensions
from deployer.services.git_module import GitWorkspace, WorkspaceGitError
from deployer.services.validator import FIELD_VALIDATORS, validate_url


def _load_config(config_path, url, appid, docker, uris, labels, run_failed) -> TriggerConfig:
    data = {}
    if config_path:
        try:
            data = json.loads(Path(config_path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise click.ClickException(f"Не удалось прочитать конфиг '{config_path}': {e}")

    # опции командной строки важнее файла
    if url:
        data["url"] = url
    if appid:
        data["appid"] = appid
    if docker:
        data["docker"] = docker
    if uris:
        data["uris"] = [{"uri": uri} for uri in uris]
    if labels:
        data["labels"] = [{"name": n, "value": v} for n, v in labels.items()]
    if run_failed:
        data["run_failed"] = True

    if not data.get("url"):
        raise click.UsageError("Не задан адрес Marathon: передайте URL или url в --config.")

    try:
        return TriggerConfig.model_validate(data)
    except ValidationError as e:
        raise click.ClickException(f"Некорректная конфигурация шага деплоя:\n{e}")


def _echo_verdict(verdict) -> None:
    line = verdict.kind.value.upper()
    if verdict.message:
        line += f": {verdict.message}"
    click.echo(line, err=verdict.kind != VerdictKind.OK)


@click.group()
@click.version_option(package_name=settings.APP_NAME)
def main():
    """Деплой приложений в Marathon после сборки."""


@main.command()
@click.argument("url", required=False)
@click.option("--appid", help="id приложения в Marathon (переопределяет marathon.json)")
@click.option("--docker", help="docker-образ (переопределяет marathon.json)")
@click.option("--uri", "uris", multiple=True, help="URI для скачивания в sandbox, можно несколько раз")
@click.option("--label", "labels", multiple=True, help="label приложения NAME=VALUE, можно несколько раз")
@click.option("--run-failed", is_flag=True, help="Деплоить даже если сборка не успешна")
@click.option(
    "--result",
    "outcome",
    type=click.Choice([o.value for o in BuildOutcome], case_sensitive=False),
    default=BuildOutcome.SUCCESS.value,
    envvar="BUILD_RESULT",
    show_default=True,
    help="Результат сборки",
)
@click.option("--build-var", "build_vars", multiple=True, help="Переменная сборки NAME=VALUE")
@click.option(
    "-w", "--workspace",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Рабочая директория сборки (там лежит marathon.json)",
)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="JSON с настройками шага")
@click.option("--git-env/--no-git-env", default=True, help="Добавить GIT_COMMIT/GIT_BRANCH из workspace")
@click.pass_context
@async_click
async def deploy(ctx, url, appid, docker, uris, labels, run_failed, outcome, build_vars,
                 workspace, config_path, git_env):
    """Обновить (или создать) приложение в Marathon по результату сборки."""
    click.echo(settings.LOGO + "\n", err=True)

    try:
        label_pairs = parse_pairs(labels, "--label")
        build_variables = parse_pairs(build_vars, "--build-var")
    except ValueError as e:
        raise click.BadParameter(str(e))

    config = _load_config(config_path, url, appid, docker, uris, label_pairs, run_failed)

    if git_env:
        git = GitWorkspace(workspace)
        try:
            # явно переданные --build-var важнее git-метаданных
            build_variables = {**git.variables(), **build_variables}
        except WorkspaceGitError:
            click.echo("Деплой продолжится без GIT_COMMIT/GIT_BRANCH.", err=True)

    recorder = MarathonRecorder(workspace=workspace)
    result = await run_animation(
        recorder.execute,
        config,
        BuildOutcome(outcome.upper()),
        build_variables,
        text=f"Деплой в Marathon {config.url}",
    )

    for line in result.logs:
        click.echo(line)
    for line in result.warnings:
        click.echo(line, err=True)

    ctx.exit(0 if result.succeeded else 1)


@main.command("check-url")
@click.argument("url", required=False, default="")
@click.pass_context
def check_url(ctx, url):
    """Проверить, что URL корректен и отвечает 2xx."""
    verdict = validate_url(url)
    _echo_verdict(verdict)
    ctx.exit(1 if verdict.kind == VerdictKind.ERROR else 0)


@main.command()
@click.argument("field", type=click.Choice(sorted(FIELD_VALIDATORS)))
@click.argument("value", required=False, default="")
@click.pass_context
def check(ctx, field, value):
    """Проверить значение поля шага деплоя."""
    step = extensions.get(settings.DISPLAY_NAME)
    verdict = step.validate_field(field, value)
    _echo_verdict(verdict)
    ctx.exit(1 if verdict.kind == VerdictKind.ERROR else 0)


if __name__ == "__main__":
    main()
