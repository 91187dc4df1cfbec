"""
Labeler configuration loading.

The configuration is a YAML document listing the size labels to manage:

    ignore-linguist-generated: true
    labels:
      - name: size/XS
        color: 00ff00
        min-lines: 0
        description: Less than 10 lines changed
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

import yaml

from .exceptions import ConfigError
from .filesystem import FileSystem, LocalFileSystem
from .models import SizeLabel

DEFAULT_CONFIG_PATH = ".github/pr-size-labeler.yml"


@dataclass
class LabelerConfig:
    """Settings loaded from the configuration file."""
    # Loaded for compatibility; exclusion is driven by the presence of .gitattributes
    ignore_linguist_generated: bool = False
    labels: List[SizeLabel] = field(default_factory=list)


def _parse_label(index: int, entry: Dict) -> SizeLabel:
    """Build a SizeLabel from one entry of the `labels` list.

    Raises:
        ConfigError: If a required key is missing or has the wrong type
    """
    if not isinstance(entry, dict):
        raise ConfigError(f"labels[{index}] must be a mapping")

    for key in ('name', 'color', 'min-lines'):
        if entry.get(key) is None:
            raise ConfigError(f"labels[{index}] is missing required key '{key}'")

    if not isinstance(entry['color'], str):
        # YAML reads unquoted all-digit colors such as 000000 as numbers
        raise ConfigError(f"labels[{index}] color must be a quoted string, got {entry['color']!r}")

    min_lines = entry['min-lines']
    # bool is an int subclass; `min-lines: yes` is not a threshold
    if isinstance(min_lines, bool) or not isinstance(min_lines, int):
        raise ConfigError(f"labels[{index}] min-lines must be an integer, got {min_lines!r}")
    if min_lines < 0:
        raise ConfigError(f"labels[{index}] min-lines must not be negative, got {min_lines}")

    description = entry.get('description')
    return SizeLabel(
        name=str(entry['name']),
        color=str(entry['color']).lstrip('#'),
        min_lines=min_lines,
        description='' if description is None else str(description),
    )


def parse_config(content: str) -> LabelerConfig:
    """Parse configuration text.

    Args:
        content: YAML configuration document

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If the document is not valid YAML or is malformed
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    raw_labels = data.get('labels')
    if raw_labels is None:
        raise ConfigError("Configuration is missing required key 'labels'")
    if not isinstance(raw_labels, list):
        raise ConfigError("'labels' must be a list")

    ignore_generated = data.get('ignore-linguist-generated', False)
    if not isinstance(ignore_generated, bool):
        raise ConfigError(f"'ignore-linguist-generated' must be true or false, got {ignore_generated!r}")

    labels = [_parse_label(i, entry) for i, entry in enumerate(raw_labels)]

    seen = set()
    for label in labels:
        if label.name in seen:
            raise ConfigError(f"Duplicate label name '{label.name}' in configuration")
        seen.add(label.name)

    return LabelerConfig(
        ignore_linguist_generated=ignore_generated,
        labels=labels,
    )


def load_config(path: str = DEFAULT_CONFIG_PATH, fs: FileSystem = None) -> LabelerConfig:
    """Load the configuration file.

    Args:
        path: Path of the configuration file
        fs: File access to read through (defaults to the working directory)

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If the file cannot be read or is malformed
    """
    fs = fs or LocalFileSystem()
    try:
        content = fs.read_file(path)
    except OSError as e:
        raise ConfigError(f"Could not read configuration from {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Configuration {path} is not valid UTF-8: {e}") from e

    config = parse_config(content)
    logging.info(f"Loaded {len(config.labels)} size label(s) from {path}")
    return config
