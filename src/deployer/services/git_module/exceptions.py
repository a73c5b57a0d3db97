from typing import List, Optional

from deployer.exceptions import DeployExceptions


class WorkspaceGitError(DeployExceptions):
    """
    Ошибка при чтении git-метаданных рабочей директории сборки.
    """

    def __init__(
        self,
        path: str,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = f"Error to read git metadata from workspace {path}"
        super().__init__(*args, description=description, logs=logs)
        self.path = path
