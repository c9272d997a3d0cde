"""
Модель OpenAPI документа.

Только форма данных, без логики генерации. Схемы описаны явным
сумм-типом: ссылка или одна из типизированных форм, выбор варианта
делает дискриминатор по ``$ref``/``type``.
"""

import logging
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    field_validator,
)

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "patch", "delete")


class SpecNode(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class ReferenceSchema(SpecNode):
    """Ссылка ``#/components/schemas/<Name>``"""

    ref: str = Field(alias="$ref")


class TypedSchema(SpecNode):
    title: Optional[str] = None
    description: Optional[str] = None
    format: Optional[str] = None
    nullable: bool = False
    enum: Optional[List[Any]] = None
    one_of: List["Schema"] = Field(default_factory=list, alias="oneOf")
    any_of: List["Schema"] = Field(default_factory=list, alias="anyOf")
    all_of: List["Schema"] = Field(default_factory=list, alias="allOf")

    @field_validator("title", "description", "format", mode="before")
    @classmethod
    def text_as_str(cls, value):
        return value if value is None or isinstance(value, str) else str(value)

    @field_validator("enum", mode="before")
    @classmethod
    def enum_as_list(cls, value):
        return value if isinstance(value, list) else None


class StringSchema(TypedSchema):
    type: Literal["string"] = "string"


class NumberSchema(TypedSchema):
    # integer и number в TypeScript неразличимы
    type: Literal["number", "integer"] = "number"


class BooleanSchema(TypedSchema):
    type: Literal["boolean"] = "boolean"


class ArraySchema(TypedSchema):
    type: Literal["array"] = "array"
    items: Optional["Schema"] = None


class ObjectSchema(TypedSchema):
    type: Literal["object"] = "object"
    properties: Dict[str, "Schema"] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)
    additional_properties: Union[bool, "Schema"] = Field(
        default=False, alias="additionalProperties", union_mode="left_to_right"
    )

    @field_validator("required", mode="before")
    @classmethod
    def required_as_list(cls, value):
        # Swagger 2 иногда кладет сюда bool
        return value if isinstance(value, list) else []

    @field_validator("properties", mode="before")
    @classmethod
    def properties_as_dict(cls, value):
        return value if isinstance(value, dict) else {}


class UntypedSchema(TypedSchema):
    """Схема без ``type`` или с неизвестным ``type``"""

    type: Optional[str] = None


_TYPE_TAGS = {
    "string": "string",
    "number": "number",
    "integer": "number",
    "boolean": "boolean",
    "array": "array",
    "object": "object",
}

_MODEL_TAGS = {
    ReferenceSchema: "ref",
    StringSchema: "string",
    NumberSchema: "number",
    BooleanSchema: "boolean",
    ArraySchema: "array",
    ObjectSchema: "object",
    UntypedSchema: "untyped",
}


def _normalize_schema(value: Any) -> Any:
    """Приведение вольностей реальных документов к форме 3.0"""
    if isinstance(value, bool):
        return {}

    if not isinstance(value, dict):
        return value

    declared = value.get("type")
    if isinstance(declared, list):
        kinds = [kind for kind in declared if kind != "null"]
        value = {key: item for key, item in value.items() if key != "type"}
        if kinds:
            value["type"] = kinds[0]
        if "null" in declared:
            value["nullable"] = True
    elif declared is not None and not isinstance(declared, str):
        value = {key: item for key, item in value.items() if key != "type"}

    return value


def _schema_tag(value: Any) -> str:
    if isinstance(value, dict):
        if "$ref" in value:
            return "ref"

        declared = value.get("type")
        if declared in _TYPE_TAGS:
            return _TYPE_TAGS[declared]

        if declared is None:
            if "properties" in value or "additionalProperties" in value:
                return "object"
            if "items" in value:
                return "array"

        return "untyped"

    return _MODEL_TAGS.get(type(value), "untyped")


def _lenient_schema(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    """Некорректный узел схемы становится схемой без типа, документ не отвергается"""
    try:
        return handler(value)
    except ValidationError as e:
        logger.warning(
            "Некорректная схема заменена на unknown: %s",
            "; ".join(error["msg"] for error in e.errors()),
        )
        return UntypedSchema()


# WrapValidator последним: он внешний и ловит ошибки всего узла
Schema = Annotated[
    Union[
        Annotated[ReferenceSchema, Tag("ref")],
        Annotated[StringSchema, Tag("string")],
        Annotated[NumberSchema, Tag("number")],
        Annotated[BooleanSchema, Tag("boolean")],
        Annotated[ArraySchema, Tag("array")],
        Annotated[ObjectSchema, Tag("object")],
        Annotated[UntypedSchema, Tag("untyped")],
    ],
    Discriminator(_schema_tag),
    BeforeValidator(_normalize_schema),
    WrapValidator(_lenient_schema),
]


for _model in (
    TypedSchema,
    StringSchema,
    NumberSchema,
    BooleanSchema,
    ArraySchema,
    ObjectSchema,
    UntypedSchema,
):
    _model.model_rebuild()


def _resolved_parameters(value: Any) -> Any:
    # Неразрешенные $ref и мусор в списке параметров пропускаются
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict) and "$ref" not in item]


class Parameter(SpecNode):
    name: str
    location: Literal["path", "query", "header", "cookie"] = Field(alias="in")
    required: bool = False
    schema_: Optional[Schema] = Field(default=None, alias="schema")
    description: Optional[str] = None

    @property
    def key(self) -> Tuple[str, str]:
        return self.name, self.location


class MediaType(SpecNode):
    schema_: Optional[Schema] = Field(default=None, alias="schema")


class RequestBody(SpecNode):
    description: Optional[str] = None
    required: bool = False
    content: Dict[str, MediaType] = Field(default_factory=dict)


class Response(SpecNode):
    description: Optional[str] = None
    content: Dict[str, MediaType] = Field(default_factory=dict)


class Operation(SpecNode):
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: List[Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")
    responses: Dict[str, Response] = Field(default_factory=dict)
    tags: List[str] = Field(default_factory=list)
    deprecated: bool = False

    @field_validator("parameters", mode="before")
    @classmethod
    def parameters_resolved(cls, value):
        return _resolved_parameters(value)

    @field_validator("responses", mode="before")
    @classmethod
    def status_codes_as_str(cls, value):
        # В YAML коды ответов приходят числами
        if isinstance(value, dict):
            return {str(code): response for code, response in value.items()}
        return value


class PathItem(SpecNode):
    get: Optional[Operation] = None
    post: Optional[Operation] = None
    put: Optional[Operation] = None
    patch: Optional[Operation] = None
    delete: Optional[Operation] = None
    parameters: List[Parameter] = Field(default_factory=list)

    @field_validator("parameters", mode="before")
    @classmethod
    def parameters_resolved(cls, value):
        return _resolved_parameters(value)

    def operations(self) -> List[Tuple[str, Operation]]:
        """Операции пути в фиксированном порядке методов"""
        return [
            (method, getattr(self, method))
            for method in HTTP_METHODS
            if getattr(self, method) is not None
        ]


class Info(SpecNode):
    title: str = "API"
    version: str = "1.0.0"
    description: Optional[str] = None

    @field_validator("title", "version", mode="before")
    @classmethod
    def as_str(cls, value):
        return value if value is None else str(value)


class Server(SpecNode):
    url: str
    description: Optional[str] = None


class Components(SpecNode):
    schemas: Dict[str, Schema] = Field(default_factory=dict)


class Spec(SpecNode):
    openapi: Optional[str] = None
    info: Info = Field(default_factory=Info)
    servers: List[Server] = Field(default_factory=list)
    paths: Dict[str, PathItem]
    components: Components = Field(default_factory=Components)
