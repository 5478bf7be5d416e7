"""Argument models and JSON schemas derived from tool signatures."""

import asyncio
import concurrent.futures
import contextvars
import inspect
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field, create_model
from typing_extensions import TypedDict

from golang_mcp.docstring import extract_docs_from_string


class FunctionSchema(TypedDict):
    name: str
    description: str
    parameters: dict[str, Any]


class JSONSchema(TypedDict):
    type: str
    function: FunctionSchema


class FunctionDescription:
    """A tool function together with its validated argument model."""

    function: Callable
    function_schema: JSONSchema
    name: str
    description: str
    tags: list[str]
    args_model: type[BaseModel]

    def __init__(
        self,
        func: Callable,
        name: str | None = None,
        doc_override: str | None = None,
        description: str = "",
        tags: list[str] | None = None,
    ):
        self.function = func
        self.name = name or func.__name__
        self.tags = tags or []

        self.sig = inspect.signature(func)
        self.is_async = inspect.iscoroutinefunction(func)

        doc_text = doc_override or func.__doc__ or f"Function {self.name}"
        self.docstring_info = extract_docs_from_string(doc_text)
        self.description = description or self.docstring_info.description or doc_text

        self.args_model = self._create_args_model()
        self.function_schema = {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description.strip(),
                "parameters": self.args_model.model_json_schema(),
            },
        }

    def _create_args_model(self) -> type[BaseModel]:
        field_definitions: dict[str, Any] = {}
        for param_name, param in self.sig.parameters.items():
            annotation = Any if param.annotation is inspect.Parameter.empty else param.annotation
            param_description = self.docstring_info.parameters.get(param_name, "")
            if param.default is inspect.Parameter.empty:
                field = Field(description=param_description)
            else:
                field = Field(default=param.default, description=param_description)
            field_definitions[param_name] = (annotation, field)

        model_name = "".join(part.title() for part in self.name.split("_")) + "Args"
        return create_model(model_name, **field_definitions)

    def validate_and_parse_args(self, json_args: dict) -> dict:
        """Validate raw JSON arguments against the argument model."""
        parsed_args = self.args_model.model_validate(json_args)
        return {k: getattr(parsed_args, k) for k in self.args_model.model_fields}

    def call(self, *args, **kwargs) -> Any:
        """Call the function, blocking on it if it is a coroutine function."""
        result = self.function(*args, **kwargs)
        if not self.is_async:
            return result

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(result)

        # Already inside a loop: run the coroutine on a fresh loop in a thread.
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
            context = contextvars.copy_context()
            return executor.submit(context.run, asyncio.run, result).result()

    async def call_async(self, *args, **kwargs) -> Any:
        if self.is_async:
            return await self.function(*args, **kwargs)
        return self.function(*args, **kwargs)
