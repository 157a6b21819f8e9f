"""HTTP API: FastAPI application, service wiring and batch task tracking."""

from .api import create_app
from .container import ServiceContainer
from .tasks import BatchTaskQueue

__all__ = [
    "BatchTaskQueue",
    "ServiceContainer",
    "create_app",
]
