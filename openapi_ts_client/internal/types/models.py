from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from .spec import Parameter, RequestBody, Response


class Endpoint(BaseModel):
    """Нормализованная операция (метод + путь), неизменяема после извлечения"""

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    operation_id: str
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: Tuple[Parameter, ...] = ()
    request_body: Optional[RequestBody] = None
    responses: Dict[str, Response] = {}
    tags: Tuple[str, ...] = ()
    deprecated: bool = False

    @property
    def label(self) -> str:
        return f"{self.operation_id} ({self.method.upper()} {self.path})"

    def parameters_in(self, location: str) -> List[Parameter]:
        return [param for param in self.parameters if param.location == location]


class CodeBlock(BaseModel):
    order: int = 0
    code: str = ""

    def __str__(self):
        return self.code.replace("\t", "    ")


class CodeFile(BaseModel):
    file_name: str

    code_blocks: list[CodeBlock] = []

    def __str__(self):
        return "\n\n".join(
            str(block)
            for block in sorted(self.code_blocks, key=lambda x: x.order, reverse=True)
            if block.code
        )

    def add_code_block(self, code_block: Union[CodeBlock, str], **kwargs) -> "CodeFile":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block, **kwargs)

        self.code_blocks.append(code_block)
        return self


class Project(BaseModel):
    name: str
    files: list[CodeFile] = []

    def add_file(self, file_name: Union[CodeFile, str], **kwargs) -> CodeFile:
        code_file = (
            CodeFile(file_name=file_name, **kwargs)
            if isinstance(file_name, str)
            else file_name
        )
        self.files.append(code_file)

        return code_file
