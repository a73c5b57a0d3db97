from typing import List, Optional

from deployer.exceptions import DeployExceptions


class MarathonError(DeployExceptions):
    """
    Marathon недоступен или ответил так, что обновление не состоялось.
    """

    def __init__(
        self,
        url: str,
        message: str,
        status_code: Optional[int] = None,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = f"Error to update Marathon app at {url}: {message}"
        super().__init__(*args, description=description, logs=logs)
        self.url = url
        self.message = message
        self.status_code = status_code
