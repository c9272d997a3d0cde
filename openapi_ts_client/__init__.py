"""Генератор типизированных TypeScript клиентов из OpenAPI 3.0"""

from .config import GeneratorConfig
from .errors import GenerationError, NameCollisionError, SpecError
from .generator import ApiClientGenerator, GeneratedClient, generate_client_artifacts

__all__ = [
    "ApiClientGenerator",
    "GeneratedClient",
    "GenerationError",
    "GeneratorConfig",
    "NameCollisionError",
    "SpecError",
    "generate_client_artifacts",
]
