from typing import List

from ..types.models import Endpoint
from ..types.spec import Parameter, Spec


def generate_operation_id(method: str, path: str) -> str:
    """
    operationId для операции без него.

    Examples:
        >>> generate_operation_id("post", "/users/{id}/posts")
        'postUsersIdPosts'
    """
    parts = [
        part.replace("{", "").replace("}", "")
        for part in path.split("/")
        if part
    ]
    return method.lower() + "".join(part[:1].upper() + part[1:] for part in parts)


def merge_parameters(
    path_level: List[Parameter], operation_level: List[Parameter]
) -> List[Parameter]:
    """Параметры операции перекрывают параметры пути с той же парой (name, in)"""
    overridden = {param.key for param in operation_level}

    return [
        param for param in path_level if param.key not in overridden
    ] + list(operation_level)


def extract_endpoints(spec: Spec) -> List[Endpoint]:
    """Эндпоинты в порядке путей документа, внутри пути - get, post, put, patch, delete"""
    endpoints = []

    for path, path_item in spec.paths.items():
        for method, operation in path_item.operations():
            endpoints.append(
                Endpoint(
                    method=method,
                    path=path,
                    operation_id=operation.operation_id
                    or generate_operation_id(method, path),
                    summary=operation.summary,
                    description=operation.description,
                    parameters=tuple(
                        merge_parameters(path_item.parameters, operation.parameters)
                    ),
                    request_body=operation.request_body,
                    responses=operation.responses,
                    tags=tuple(operation.tags),
                    deprecated=operation.deprecated,
                )
            )

    return endpoints
