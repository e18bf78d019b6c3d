"""
HeyWeb CLI configuration.

Priority: CLI flag > environment variable > default.

  - api_base        HEYWEB_API_BASE            http://127.0.0.1:8000
  - timeout         HEYWEB_CLI_TIMEOUT         30 (seconds)
  - output_format   HEYWEB_CLI_OUTPUT_FORMAT   text (text|json)
  - retry_times     HEYWEB_CLI_RETRY_TIMES     3
"""

import os
from dataclasses import asdict, dataclass
from typing import Literal, Optional

DEFAULT_API_BASE = "http://127.0.0.1:8000"
OutputFormat = Literal["text", "json"]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw.isdigit() else default


@dataclass
class CLIConfig:
    api_base: str = DEFAULT_API_BASE
    timeout: int = 30
    output_format: OutputFormat = "text"
    retry_times: int = 3

    @classmethod
    def from_env(cls) -> "CLIConfig":
        output_format = os.getenv("HEYWEB_CLI_OUTPUT_FORMAT", "text").strip().lower()
        return cls(
            api_base=os.getenv("HEYWEB_API_BASE") or DEFAULT_API_BASE,
            timeout=_env_int("HEYWEB_CLI_TIMEOUT", 30),
            output_format="json" if output_format == "json" else "text",
            retry_times=_env_int("HEYWEB_CLI_RETRY_TIMES", 3),
        )

    def to_dict(self) -> dict:
        return asdict(self)


def get_config(
    api_base: Optional[str] = None,
    timeout: Optional[int] = None,
    output_format: Optional[OutputFormat] = None,
    retry_times: Optional[int] = None,
) -> CLIConfig:
    config = CLIConfig.from_env()
    if api_base:
        config.api_base = api_base
    if timeout:
        config.timeout = timeout
    if output_format:
        config.output_format = output_format
    if retry_times:
        config.retry_times = retry_times
    return config
