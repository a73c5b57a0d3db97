import os

from pathlib import Path
from typing import Callable, Dict, Mapping, Optional

from settings import DISPLAY_NAME

from .exceptions import DeployExceptions
from .models import BuildOutcome, RunResult, TriggerConfig, UpdateResult, ValidationVerdict
from .services.builders import app as builder
from .services.validator import validate_field


DeploymentPipeline = Callable[[TriggerConfig, Mapping[str, str], Path], UpdateResult]

# результат ещё не выставлен — сборка пока что успешна
PASSING_OUTCOMES = frozenset({BuildOutcome.SUCCESS, BuildOutcome.NONE})


def should_deploy(outcome: Optional[BuildOutcome], run_failed: bool) -> bool:
    if outcome is None:
        outcome = BuildOutcome.NONE
    return outcome in PASSING_OUTCOMES or run_failed


def build_environment(
    base_env: Mapping[str, str],
    build_variables: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Окружение сборки: снимок окружения процесса, поверх — переменные сборки.
    При совпадении ключей побеждают переменные сборки.
    """
    env = dict(base_env)
    env.update(build_variables or {})
    return env


class MarathonRecorder:
    """
    Post-build шаг: после сборки обновляет (или создаёт) приложение в Marathon.

    Решает только КОГДА деплоить и С КАКИМ окружением; сборку дескриптора
    и запрос к Marathon делает pipeline (по умолчанию builders.app.deploy).
    Ошибки Marathon не роняют сборку — логируются и игнорируются.
    """

    display_name = DISPLAY_NAME

    def __init__(
        self,
        pipeline: DeploymentPipeline = builder.deploy,
        base_env: Optional[Mapping[str, str]] = None,
        workspace: Optional[Path] = None,
    ) -> None:
        self.pipeline = pipeline
        self.base_env = base_env
        self.workspace = Path(workspace or ".")

    def execute(
        self,
        config: TriggerConfig,
        outcome: Optional[BuildOutcome],
        build_variables: Optional[Mapping[str, str]] = None,
        workspace: Optional[Path] = None,
    ) -> RunResult:
        if outcome is None:
            outcome = BuildOutcome.NONE

        result = RunResult(
            deployed=False,
            final_status=outcome,
            succeeded=outcome == BuildOutcome.SUCCESS,
        )

        if not should_deploy(outcome, config.run_failed):
            result.logs.append(
                f"Сборка завершилась со статусом {outcome.value} — деплой пропущен "
                "(включите run_failed, чтобы деплоить всегда)."
            )
            return result

        base_env = os.environ if self.base_env is None else self.base_env
        env = build_environment(base_env, build_variables)
        workspace = Path(workspace or self.workspace)

        result.logs.append(f"Деплой в Marathon {config.url} (статус сборки {outcome.value}).")
        try:
            update = self.pipeline(config, env, workspace)
        except DeployExceptions as e:
            # проблема Marathon или дескриптора не влияет на результат сборки
            result.logs.extend(e.logs)
            result.warnings.append(f"Деплой в Marathon не выполнен: {e.description}")
            return result

        result.deployed = True
        result.update = update
        if update.ok:
            result.logs.append(f"Приложение {update.app_id} обновлено в Marathon.")
        else:
            result.warnings.append(
                f"Marathon отклонил обновление {update.app_id}: "
                f"{update.status_code} {update.message}"
            )
        return result

    def trigger(self, outcome: Optional[BuildOutcome], config: TriggerConfig) -> RunResult:
        return self.execute(config, outcome)

    def validate_field(self, field_name: str, value: Optional[str]) -> ValidationVerdict:
        return validate_field(field_name, value)
