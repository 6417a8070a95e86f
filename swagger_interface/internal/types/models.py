from typing import Optional, Union

from pydantic import BaseModel, field_validator


class Variable(BaseModel):
    """Аннотация типа: значение или обертка вида Wrap[value, ...]"""

    value: list[Union["Variable", str]] = []
    wrap_name: Optional[str] = None

    @field_validator("value", mode="before")
    def value_check(cls, value):
        if not isinstance(value, list):
            return [value]
        return value

    def __str__(self):
        _value = ", ".join(str(_) for _ in self.value)

        if self.wrap_name is None:
            return _value

        return f"{self.wrap_name}[{_value}]" if _value else "Any"


class Parameter(BaseModel):
    name: str

    var_type: Optional[Variable] = None
    default: Optional[str] = None

    order: int = 0

    def __str__(self):
        return (
            self.name
            + (f": {self.var_type}" if self.var_type else "")
            + (f" = {self.default}" if self.default is not None else "")
        )


class CodeBlock(BaseModel):
    order: int = 0
    code: str = "pass"

    def __str__(self):
        return self.code.replace("\t", "    ")


def _docstring(text: Optional[str]) -> str:
    if not text:
        return ""
    return '"""' + text.replace('"""', "'''").strip() + '"""\n'


def _indent(text: str) -> str:
    return "\n".join(("    " + line) if line else "" for line in text.split("\n"))


class Function(BaseModel):
    name: str
    parameters: list[Parameter] = []
    response: str = "None"

    async_def: bool = False
    decorators: list[str] = []
    description: Optional[str] = None

    code: CodeBlock = CodeBlock(code="pass")
    order: int = 0

    def __str__(self) -> str:
        # Параметры без значения по умолчанию идут первыми
        parameters = sorted(self.parameters, key=lambda x: x.default is not None)

        if len(parameters) > 1:
            signature = (
                "(\n" + "".join(f"    {p},\n" for p in parameters) + f") -> {self.response}:"
            )
        else:
            signature = "(" + ", ".join(map(str, parameters)) + f") -> {self.response}:"

        body = _docstring(self.description) + str(self.code)

        return (
            "".join(f"{decorator}\n" for decorator in self.decorators)
            + f"{'async ' if self.async_def else ''}def {self.name}"
            + signature
            + "\n"
            + _indent(body)
        )


class Class(BaseModel):
    name: str
    inherits: list[str] = []
    description: Optional[str] = None

    parameters: list[Parameter] = []
    code_blocks: list[CodeBlock] = []
    functions: dict[str, Function] = {}

    order: int = 0

    def __str__(self) -> str:
        sections = []
        if self.description:
            sections.append(_docstring(self.description).rstrip("\n"))
        if self.code_blocks:
            sections.append("\n".join(map(str, self.code_blocks)))
        if self.parameters:
            sections.append("\n".join(map(str, self.parameters)))
        sections.extend(map(str, self.functions.values()))

        body = "\n\n".join(sections) if sections else "pass"

        return (
            f"class {self.name}"
            + (f"({', '.join(self.inherits)})" if self.inherits else "")
            + ":\n"
            + _indent(body)
        )

    def add_function(self, function: Union[Function, str], **kwargs) -> Function:
        if isinstance(function, str):
            function = Function(name=function, **kwargs)

        self.functions[function.name] = function
        return function


class CodeFile(BaseModel):
    file_name: str

    imports: list[str] = []
    classes: dict[str, Class] = {}
    code_blocks: list[CodeBlock] = []

    def __str__(self):
        objects = sorted(
            self.code_blocks + list(self.classes.values()),
            key=lambda x: x.order,
            reverse=True,
        )
        parts = []
        if self.imports:
            parts.append("\n".join(self.imports))
        parts.extend(str(_).rstrip("\n") for _ in objects)

        return "\n\n\n".join(parts).replace("\t", "    ") + "\n"

    def add_class(self, cls: Union[Class, str], **kwargs) -> Class:
        if isinstance(cls, str):
            cls = Class(name=cls, **kwargs)

        self.classes[cls.name] = cls
        return cls

    def add_code_block(self, code_block: Union[CodeBlock, str], **kwargs) -> "CodeFile":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block, **kwargs)

        self.code_blocks.append(code_block)
        return self


class Project(BaseModel):
    name: str
    files: list[CodeFile] = []

    def add_file(self, file_name: str, **kwargs) -> CodeFile:
        code_file = CodeFile(file_name=file_name, **kwargs)
        self.files.append(code_file)
        return code_file


Variable.model_rebuild()
