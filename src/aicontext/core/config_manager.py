"""
Configuration management for aicontext.

Loading, merging and persisting of the `aicontext.json` configuration.
Every merge function takes the current configuration and returns a new one;
the base configuration and the preset catalog are passed in as parameters
so callers (and tests) can supply their own.
"""

import json
import logging
import os
from dataclasses import replace
from typing import Any, Dict, Iterable, Mapping, Tuple

from .exceptions import ConfigParseError, PersistError, UnknownPreset
from .models import Config, ConfigDelta, WIRE_KEYS
from .presets import BASE_CONFIG, PRESETS, Preset

logger = logging.getLogger(__name__)


def normalize_extension(extension: str) -> str:
    """Return the extension in dotted form ('js' -> '.js')."""
    extension = extension.strip()
    return extension if extension.startswith('.') else f'.{extension}'


def _string_list(key: str, value: Any, path: str) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigParseError(path, f"'{key}' must be a list of strings")
    return tuple(value)


def config_from_dict(data: Any, path: str = '<memory>', base: Config = BASE_CONFIG) -> Config:
    """
    Build a Config from its wire representation.

    Keys missing from `data` take their value from `base`. Unknown keys are
    ignored.

    Raises:
        ConfigParseError: If the data is not an object or a value has the
            wrong shape.
    """
    if not isinstance(data, dict):
        raise ConfigParseError(path, 'top-level value must be an object')

    values: Dict[str, Any] = {}
    for attr, key in WIRE_KEYS.items():
        if key not in data:
            values[attr] = getattr(base, attr)
            continue
        value = data[key]
        if attr in ('exclude_paths', 'include_extensions', 'include_paths', 'presets'):
            values[attr] = _string_list(key, value, path)
        elif attr == 'max_file_size_kb':
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigParseError(path, f"'{key}' must be a positive number")
            values[attr] = value
        elif attr == 'output_file':
            if not isinstance(value, str) or not value:
                raise ConfigParseError(path, f"'{key}' must be a non-empty string")
            values[attr] = value
        elif attr == 'use_gitignore':
            if not isinstance(value, bool):
                raise ConfigParseError(path, f"'{key}' must be a boolean")
            values[attr] = value
    return Config(**values)


def load_config(path: str, base: Config = BASE_CONFIG) -> Config:
    """
    Read a persisted configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigParseError: If the file exists but cannot be parsed.
    """
    with open(path, 'r', encoding='utf-8') as f:
        raw = f.read()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigParseError(path, str(e)) from e
    return config_from_dict(data, path, base)


def load_or_default(path: str, base: Config = BASE_CONFIG) -> Tuple[Config, bool]:
    """
    Load the persisted configuration, falling back to `base`.

    A corrupt file is reported as a warning and never overwritten here.

    Returns:
        Tuple of (config, existed) where `existed` tells whether a readable
        configuration file was found.
    """
    try:
        return load_config(path, base), True
    except FileNotFoundError:
        logger.debug(f"No configuration at {path}, using defaults")
        return base, False
    except ConfigParseError as e:
        logger.warning(f"{e}. Using defaults.")
        return base, False
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}. Using defaults.")
        return base, False


def merge_preset(config: Config, name: str,
                 catalog: Mapping[str, Preset] = PRESETS) -> Tuple[Config, bool]:
    """
    Union a named preset into the configuration.

    Returns:
        Tuple of (new_config, changed).

    Raises:
        UnknownPreset: If `name` is not in the catalog.
    """
    preset = catalog.get(name)
    if preset is None:
        raise UnknownPreset(name)

    merged = replace(
        config,
        exclude_paths=config.exclude_paths + preset.exclude_paths,
        include_extensions=config.include_extensions + tuple(
            normalize_extension(ext) for ext in preset.include_extensions
        ),
        presets=config.presets + (name,),
    )
    return merged, merged != config


def _without(values: Tuple[str, ...], removals: Iterable[str]) -> Tuple[str, ...]:
    to_remove = set(removals)
    return tuple(value for value in values if value not in to_remove)


def apply_delta(config: Config, delta: ConfigDelta, base: Config = BASE_CONFIG,
                catalog: Mapping[str, Preset] = PRESETS) -> Tuple[Config, bool]:
    """
    Apply command-line modifications to a configuration.

    The order is fixed: reset, presets, exclude additions, exclude removals,
    extension additions, extension removals, scalar overrides, force-include
    additions. Removals run after additions so a preset's exclusion can be
    countermanded in the same invocation.

    Returns:
        Tuple of (new_config, should_persist).
    """
    current = base if delta.reset else config

    for name in delta.presets:
        try:
            current, _ = merge_preset(current, name, catalog)
        except UnknownPreset as e:
            logger.warning(str(e))

    if delta.add_exclude:
        current = replace(current, exclude_paths=current.exclude_paths + tuple(delta.add_exclude))
    if delta.remove_exclude:
        current = replace(current, exclude_paths=_without(current.exclude_paths, delta.remove_exclude))

    if delta.add_ext:
        added = tuple(normalize_extension(ext) for ext in delta.add_ext)
        current = replace(current, include_extensions=current.include_extensions + added)
    if delta.remove_ext:
        removed = [normalize_extension(ext) for ext in delta.remove_ext]
        current = replace(current, include_extensions=_without(current.include_extensions, removed))

    if delta.output_file is not None:
        current = replace(current, output_file=delta.output_file)
    if delta.max_file_size_kb is not None:
        if delta.max_file_size_kb <= 0:
            logger.warning(f"Ignoring non-positive max size: {delta.max_file_size_kb}")
        else:
            current = replace(current, max_file_size_kb=delta.max_file_size_kb)
    if delta.use_gitignore is not None:
        current = replace(current, use_gitignore=delta.use_gitignore)

    if delta.include:
        current = replace(current, include_paths=current.include_paths + tuple(delta.include))

    return current, delta.reset or current != config


def persist(config: Config, path: str) -> None:
    """
    Write the canonical configuration to `path`.

    Raises:
        PersistError: If the file cannot be written.
    """
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
            f.write('\n')
    except OSError as e:
        raise PersistError(path, str(e)) from e
    logger.debug(f"Configuration saved to {path}")
