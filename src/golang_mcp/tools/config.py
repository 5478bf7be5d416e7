"""Configuration for the Go tool server."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings

DEFAULT_PATH = "./..."


class PathDefaults(BaseModel):
    """Defaults shared by every tool that takes a package pattern."""

    model_config = ConfigDict(frozen=True)

    path: str = DEFAULT_PATH


class FormatDefaults(PathDefaults):
    write: bool = False


class AnalyzeDefaults(PathDefaults):
    config: str | None = None
    fast: bool = False
    fix: bool = False
    severity: str | None = None


class FixDefaults(PathDefaults):
    deps: bool = True
    imports: bool = True
    format: bool = True
    extra: bool = False


class GoTestDefaults(PathDefaults):
    verbose: bool = True
    race: bool = False
    coverage: bool = False
    coverprofile: str = "coverage.out"
    bench: str | None = None


class ToolDefaults(BaseModel):
    """Per-operation parameter defaults, applied when a caller omits one."""

    model_config = ConfigDict(frozen=True)

    analyze: AnalyzeDefaults = Field(default_factory=AnalyzeDefaults)
    fix: FixDefaults = Field(default_factory=FixDefaults)
    test: GoTestDefaults = Field(default_factory=GoTestDefaults)
    vet: PathDefaults = Field(default_factory=PathDefaults)
    format: FormatDefaults = Field(default_factory=FormatDefaults)
    lint: PathDefaults = Field(default_factory=PathDefaults)
    dead_code: PathDefaults = Field(default_factory=PathDefaults)


class Config(BaseSettings):
    """Configuration for the Go tool server."""

    server_name: str = "mcp-golang"
    server_version: str = "1.0.0"
    environment: str = "development"
    log_level: str = "INFO"

    command_timeout: float | None = Field(
        default=None, description="Seconds before a command is killed; unset waits forever"
    )
    strategies: list[str] | None = Field(
        default=None, description="Execution strategy order, e.g. ['sync', 'async']"
    )
    deadcode_command: str = "go run github.com/remyoudompheng/go-misc/deadcode"

    defaults: ToolDefaults = Field(default_factory=ToolDefaults)

    model_config = {
        "env_prefix": "GOLANG_MCP_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",
        "extra": "forbid",
    }
