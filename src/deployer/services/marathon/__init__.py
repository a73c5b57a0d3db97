from .client import MarathonClient

from .exceptions import MarathonError

__all__ = [
    "MarathonClient",
    "MarathonError",
]
