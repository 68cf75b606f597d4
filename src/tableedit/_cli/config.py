"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from tableedit._export import ExportFormat


class ConfigError(Exception):
    """Error in tableedit configuration."""


@dataclass(slots=True, frozen=True)
class TableEditConfig:
    """Configuration loaded from the ``[tool.tableedit]`` section of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    format: ExportFormat | None = None
    output: Path | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_format(value: object) -> ExportFormat:
    if not isinstance(value, str):
        msg = "Invalid [tool.tableedit].format: expected string"
        raise ConfigError(msg)
    try:
        return ExportFormat(value.lower())
    except ValueError as e:
        choices = ", ".join(f"'{f.value}'" for f in ExportFormat)
        msg = f"Invalid [tool.tableedit].format '{value}'. Expected one of: {choices}"
        raise ConfigError(msg) from e


def load_config(pyproject_path: Path) -> TableEditConfig:
    """Load and validate [tool.tableedit] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed TableEditConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("tableedit", {})

    if not section:
        return TableEditConfig(project_root=project_root)

    export_format: ExportFormat | None = None
    if "format" in section:
        export_format = _parse_format(section["format"])

    output_path: Path | None = None
    if "output" in section:
        output_value = section["output"]
        if not isinstance(output_value, str):
            msg = "Invalid [tool.tableedit].output: expected string path"
            raise ConfigError(msg)
        output_path = Path(output_value)
        if not output_path.is_absolute():
            output_path = project_root / output_path

    return TableEditConfig(
        format=export_format,
        output=output_path,
        project_root=project_root,
    )


def get_config() -> TableEditConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        TableEditConfig (may be empty if no pyproject.toml or no [tool.tableedit] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return TableEditConfig()
    return load_config(pyproject_path)
