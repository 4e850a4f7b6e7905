from .repository_task import RepositoryTaskSignals, RepositoryTaskWorker

__all__ = [
    "RepositoryTaskSignals",
    "RepositoryTaskWorker",
]
