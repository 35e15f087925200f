"""Connection settings for the OpenRadar tracker, read from ``sonar-config.yaml``."""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from sonar.client import DEFAULT_URL

TEMPLATE = """\
server:
  url: "https://openradar.appspot.com"
  token: "xxxxxxxxxxxx"           # Generate at: https://openradar.appspot.com/apikey
  timeout: 30                     # Seconds per request
"""


class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


@dataclass
class Config:
    token: str
    url: str = DEFAULT_URL
    timeout: int = 30

    @classmethod
    def from_server_section(cls, server: dict) -> "Config":
        """OPENRADAR_URL and OPENRADAR_TOKEN take precedence over *server*."""
        url = os.environ.get("OPENRADAR_URL") or server.get("url") or DEFAULT_URL
        token = os.environ.get("OPENRADAR_TOKEN") or server.get("token") or ""
        return cls(token=str(token).strip(), url=str(url).strip(), timeout=server.get("timeout", 30))

    def problems(self) -> list[str]:
        found = []
        if not self.token:
            found.append("'server.token' is missing (or set the OPENRADAR_TOKEN environment variable)")
        if not self.url.startswith(("http://", "https://")):
            found.append(f"'server.url' must be an http(s) URL, got '{self.url}'")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int) or self.timeout <= 0:
            found.append(f"'server.timeout' must be a positive integer, got {self.timeout!r}")
        return found


def load(config_path: str = "sonar-config.yaml") -> Config:
    """Read and validate *config_path*; every problem is reported in one ConfigError."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(
            f"Config file not found: '{config_path}'\n"
            "Run `python -m sonar init` to generate a template."
        )

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{config_path}': {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"'{config_path}' must be a YAML mapping at the top level.")

    config = Config.from_server_section(raw.get("server") or {})
    problems = config.problems()
    if problems:
        raise ConfigError("Invalid configuration:\n" + "\n".join(f"  - {p}" for p in problems))
    return config


def generate_template(output_path: str = "sonar-config.yaml") -> None:
    """Write the example config to *output_path*, never over an existing file."""
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")
