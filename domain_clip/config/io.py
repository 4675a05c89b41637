"""
YAML persistence for ``ClipConfig``.

Files hold the plain ``model_dump`` of a configuration, e.g.::

    invert: true
    max_workers: 4
    surface:
      kind: sphere
      center: [0.0, 0.0, 0.0]
      radius: 0.5
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from .clip_config import ClipConfig


def load_clip_config(path: str | Path) -> ClipConfig:
    """
    Read and validate a clip configuration.

    Parameters
    ----------
    path : str | Path
        YAML file to read. An empty file yields the default configuration.

    Returns
    -------
    ClipConfig

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist
    yaml.YAMLError
        If the file is not valid YAML
    ValueError
        If the content does not describe a valid configuration

    Examples
    --------
    >>> clip = Clip.from_config(load_clip_config("clips/corner.yaml"))
    """
    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"Clip configuration not found: {source}")

    try:
        raw = yaml.safe_load(source.read_text())
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"{source} is not valid YAML: {e}") from e

    try:
        return ClipConfig.model_validate(raw or {})
    except ValidationError as e:
        raise ValueError(f"Invalid clip configuration in {source}:\n{e}") from e


def save_clip_config(config: ClipConfig, path: str | Path) -> None:
    """Write ``config`` as YAML, creating parent directories as needed."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = config.model_dump(mode="json", exclude_none=True)
    target.write_text(yaml.safe_dump(payload, sort_keys=False, default_flow_style=None))


def validate_yaml_config(path: str | Path) -> tuple[bool, str]:
    """
    Check a configuration file without building a filter from it.

    Returns
    -------
    tuple[bool, str]
        ``(True, "Configuration is valid")`` or ``(False, <error message>)``
    """
    try:
        load_clip_config(path)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        return False, str(e)
    return True, "Configuration is valid"
