from git import (
    Repo as GitRepo,
    InvalidGitRepositoryError,
    NoSuchPathError,
)

from pathlib import Path
from typing import Dict, List

from .exceptions import WorkspaceGitError
from .utils import PathLike


class GitWorkspace:
    """
    Читает git-метаданные рабочей директории сборки (через GitPython).

    Jenkins Git plugin кладёт в окружение сборки GIT_COMMIT и GIT_BRANCH;
    при запуске из CLI их берём прямо из репозитория, чтобы в marathon.json
    можно было писать, например, "image": "registry/app:${GIT_COMMIT}".
    """

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)
        self.logs: List[str] = []

    def variables(self) -> Dict[str, str]:
        """
        Возвращает GIT_COMMIT и GIT_BRANCH (если HEAD не detached).

        :raises WorkspaceGitError: если путь не существует или это не git-репозиторий.
        """
        self.logs.append(f"Читаем git-метаданные из {self.path}")

        repo_obj: GitRepo | None = None
        try:
            repo_obj = GitRepo(self.path, search_parent_directories=True)
            result: Dict[str, str] = {"GIT_COMMIT": repo_obj.head.commit.hexsha}
            if not repo_obj.head.is_detached:
                result["GIT_BRANCH"] = repo_obj.active_branch.name
            else:
                self.logs.append("HEAD в состоянии detached — GIT_BRANCH не задан.")
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            self.logs.append("Рабочая директория не является git-репозиторием.")
            self.logs.append(repr(e))
            raise WorkspaceGitError(path=str(self.path), logs=self.logs)
        except ValueError as e:
            # пустой репозиторий: HEAD ещё не указывает на коммит
            self.logs.append(f"В репозитории нет коммитов: {e}")
            raise WorkspaceGitError(path=str(self.path), logs=self.logs)
        finally:
            # Явно закрываем repo_obj, чтобы на Windows не оставались залоченные файлы
            if repo_obj is not None:
                repo_obj.close()

        self.logs.append(f"GIT_COMMIT={result['GIT_COMMIT']}")
        return result
