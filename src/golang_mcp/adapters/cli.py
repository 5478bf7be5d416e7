"""CLI generation from registered tool signatures."""

import json
import logging
import sys
import types
from collections.abc import Callable
from typing import Any, Union, get_args, get_origin

import click
from pydantic import ValidationError

from golang_mcp.context import set_tool_context
from golang_mcp.discover import discover_tools_in_package
from golang_mcp.execution import ExecutionResult
from golang_mcp.function_schema import FunctionDescription
from golang_mcp.registry import REGISTRY
from golang_mcp.tools.context import ToolContext


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def get_click_type(annotation: Any) -> Any:
    """Convert Python type to Click type."""
    annotation = _unwrap_optional(annotation)
    if annotation in (str, int, float):
        return annotation
    return str


def add_cli_options(cli_func: click.Command, func_desc: FunctionDescription) -> click.Command:
    """Add one option per argument model field."""
    for field_name, field_info in func_desc.args_model.model_fields.items():
        option_name = field_name.replace("_", "-")
        field_type = _unwrap_optional(field_info.annotation)
        help_text = field_info.description or f"Value for {field_name}"

        if field_type is bool:
            # --flag/--no-flag with no default, so unset falls back to config
            cli_func = click.option(
                f"--{option_name}/--no-{option_name}",
                field_name,
                default=None,
                help=help_text,
            )(cli_func)
        else:
            cli_func = click.option(
                f"--{option_name}",
                field_name,
                type=get_click_type(field_type),
                help=help_text,
            )(cli_func)

    return cli_func


def output_result(result: Any) -> None:
    """Echo a tool result, exiting 1 if it is an error."""
    if isinstance(result, ExecutionResult):
        click.echo(result.text)
        if result.is_error:
            sys.exit(1)
    elif result is not None:
        click.echo(json.dumps(result, indent=2, default=str))


def _generate_cli_from_description(
    func_desc: FunctionDescription, context_factory: Callable[[], ToolContext]
) -> click.Command:
    first_line = (func_desc.description or "CLI for tool").split("\n")[0].strip()

    @click.command(name=func_desc.name, help=first_line)
    @click.option("--json", "json_input", help="JSON input for all arguments")
    def cli(json_input: str | None, **kwargs):
        if json_input:
            try:
                args_dict = json.loads(json_input)
            except json.JSONDecodeError as e:
                raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--json") from e
        else:
            args_dict = {k: v for k, v in kwargs.items() if v is not None}

        try:
            parsed_args = func_desc.validate_and_parse_args(args_dict)
        except ValidationError as e:
            raise click.UsageError(f"Validation error: {e}") from e

        with set_tool_context(context_factory()):
            result = func_desc.call(**parsed_args)
        output_result(result)

    return add_cli_options(cli, func_desc)


def build_cli(
    functions: list[FunctionDescription] | None = None,
    context_factory: Callable[[], ToolContext] = ToolContext,
) -> click.Group:
    """Create a click group with one command per tool."""

    @click.group()
    def cli():
        """Run Go toolchain operations from the shell."""

    for func_desc in functions if functions is not None else REGISTRY.functions:
        cli.add_command(_generate_cli_from_description(func_desc, context_factory))

    return cli


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname).1s %(asctime)s %(filename)s:%(lineno)d - %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler()],
    )
    discover_tools_in_package("golang_mcp.tools")
    build_cli()(standalone_mode=True)


if __name__ == "__main__":
    main()
