"""
Run configuration for the MINILANG command-line tools.

Classes:
    RunConfig: Options chosen by the caller of a parse run (render target, title,
        whether to offer the GraphViz viewer, logging verbosity, output path, extra
        spellings inline or from a JSON file). The parser itself never reads this object.
    ConfigError: Raised when a configuration file cannot be used.

Functions:
    setup_logging(verbose): Configures stdlib logging for CLI use.

Example JSON file:
    {
        "target": "dot",
        "open_viewer": true,
        "aliases": {"mientras": "WHILE"},
        "spellings_file": "spanish.json"
    }
"""

import copy
import json
import logging
from typing import Any

DEFAULT_VIEWER_URL = "http://www.webgraphviz.com/"


class ConfigError(Exception):
    """Raised when a configuration file is unreadable or malformed."""


class RunConfig:
    """Caller-supplied options for one parse run.

    Attributes:
        target (str): Render target name ("text", "dot", "json").
        title (str): Title of the parse run (header of the rendered output).
        open_viewer (bool): Offer to open the GraphViz viewer after rendering.
        viewer_url (str): URL opened when the viewer is accepted.
        verbose (bool): Log at INFO level instead of WARNING.
        out (str | None): Write the rendered output to this path instead of stdout.
        aliases (dict[str, str]): Extra spelling → token kind name mappings.
        spellings_file (str | None): JSON file of extra spellings, applied before
            `aliases`.
    """

    FIELD_TYPES: dict[str, type] = {
        "target": str,
        "title": str,
        "open_viewer": bool,
        "viewer_url": str,
        "verbose": bool,
        "out": str,
        "aliases": dict,
        "spellings_file": str,
    }
    FIELDS = tuple(FIELD_TYPES)

    def __init__(
        self,
        target: str = "text",
        title: str = "PARSE TREE",
        open_viewer: bool = False,
        viewer_url: str = DEFAULT_VIEWER_URL,
        verbose: bool = False,
        out: str | None = None,
        aliases: dict[str, str] | None = None,
        spellings_file: str | None = None,
    ) -> None:
        self.target = target
        self.title = title
        self.open_viewer = open_viewer
        self.viewer_url = viewer_url
        self.verbose = verbose
        self.out = out
        self.aliases: dict[str, str] = aliases or {}
        self.spellings_file = spellings_file

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.FIELDS)
        return f"RunConfig({fields})"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, RunConfig) and all(
            getattr(self, name) == getattr(other, name) for name in self.FIELDS
        )

    def to_dict(self) -> dict[str, Any]:
        return {name: copy.deepcopy(getattr(self, name)) for name in self.FIELDS}

    def merged(self, **overrides: Any) -> "RunConfig":
        """
        Returns a copy with every non-None override applied.

        Raises:
            ConfigError: If an option is unknown or its value has the wrong type.
        """
        unknown = set(overrides) - set(self.FIELDS)
        if unknown:
            raise ConfigError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
        for name, value in overrides.items():
            expected = self.FIELD_TYPES[name]
            if value is not None and not isinstance(value, expected):
                raise ConfigError(
                    f"Config option {name!r} must be {expected.__name__}, "
                    f"not {type(value).__name__}"
                )
        values = self.to_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RunConfig(**values)

    @classmethod
    def from_json(cls, path: str) -> "RunConfig":
        """
        Loads a configuration from a JSON object file.

        Raises:
            ConfigError: If the file cannot be read, is not a JSON object, or holds
                unknown keys or values of the wrong type.
        """
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to load config file {path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        return cls().merged(**raw)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(format="{levelname}: {message}", style="{")
    logging.getLogger("minilang").setLevel(logging.INFO if verbose else logging.WARNING)


__all__ = ["ConfigError", "DEFAULT_VIEWER_URL", "RunConfig", "setup_logging"]
