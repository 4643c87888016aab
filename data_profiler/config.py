"""
Options file loader (``data_profiler.config``).

Loads a YAML file holding profiling options and parses it into a frozen
``ParseOptions``. Keys may use snake_case (``sample_size``) or the camelCase
names of the JSON output (``sampleSize``)::

    detect_patterns: true
    check_uniqueness: true
    sample_size: 500
    encoding: latin1
    fixed_widths: [4, 10, 4, 14]

Failure modes
-------------
* Missing file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Top level not a mapping  -> ``ValueError``.
* Unknown option key  -> ``KeyError``.

Values are not range-checked here; ``validate_options`` does that when the
options are used.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from data_profiler.domain.types import ParseOptions


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file and return its contents as a dict (empty if blank)."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of options, got {type(data).__name__}")
    return data


def load_options_file(path: Path) -> ParseOptions:
    """Parse a YAML options file into ParseOptions."""
    return ParseOptions.from_mapping(load_yaml_file(path))
