from typing import Any

from pydantic import BaseModel, Field

from golang_mcp.execution import CommandExecutor
from golang_mcp.strategies import build_strategies
from golang_mcp.tools.config import Config


class ToolContext(BaseModel):
    """Shared context for all tools."""

    model_config = {"arbitrary_types_allowed": True}
    config: Config = Field(default_factory=Config)
    executor: CommandExecutor = Field(default=None)  # type: ignore

    def model_post_init(self, _ctx: Any):
        if self.executor is None:
            strategies = (
                build_strategies(self.config.strategies) if self.config.strategies else None
            )
            self.executor = CommandExecutor(
                strategies=strategies, timeout=self.config.command_timeout
            )
