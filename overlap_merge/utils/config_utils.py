#!/usr/bin/env python
"""
Configuration utilities for the overlap_merge package.

Run defaults come from a YAML file shipped with the package. The atom type
category table and the cutoff table are JSON objects: a packaged default file
is read first and user data (a file path or an inline JSON object) is laid
over it.
"""
import os
import json
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union

from .logger import get_logger

logger = get_logger(__name__)


def get_config_dir() -> Path:
    """Get the directory holding the packaged configuration files."""
    current_dir = Path(os.path.dirname(os.path.abspath(__file__)))
    return current_dir.parent / "config"


def get_config_path() -> Path:
    """Get the path to the default configuration file."""
    return get_config_dir() / "system_config.yaml"


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.
    
    Args:
        config_path: Path to the configuration file. If None, uses the default config file.
        
    Returns:
        Dictionary containing the configuration.
    """
    if config_path is None:
        config_path = get_config_path()
    else:
        config_path = Path(config_path)
    
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)
    
    return config or {}


def parse_json_object(text: str, source: str = "<inline>") -> Dict[str, Any]:
    """
    Parse a JSON object. Malformed content is reported and yields an empty dict.
    
    Args:
        text: JSON text
        source: Description of where the text came from, for the log message
        
    Returns:
        The decoded object, or an empty dict on error.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"JSON state: {e} (in {source})")
        return {}
    if not isinstance(data, dict):
        logger.error(f"JSON state: expected an object in {source}")
        return {}
    return data


def read_json_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a JSON object from a file; a missing or unreadable file gives an empty dict."""
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        logger.debug(f"Could not read {path}: {e}")
        return {}
    return parse_json_object(text, str(path))


def read_user_json(userdata: Optional[str]) -> Dict[str, Any]:
    """
    Read user supplied JSON that is either a file path or an inline object.
    """
    if not userdata:
        return {}
    if os.path.isfile(userdata):
        return read_json_file(userdata)
    return parse_json_object(userdata)


def load_json_table(filename: str, userdata: Optional[str] = None,
                    replace_defaults: bool = False) -> Dict[str, Any]:
    """
    Load a two-column table: packaged defaults from ``filename`` then user data.
    
    Args:
        filename: Name of the default file inside the package config directory
        userdata: File path or inline JSON laid over the defaults
        replace_defaults: If True and the user data is non-empty, it replaces
            the defaults instead of being merged into them
            
    Returns:
        dict: The merged table
    """
    table = read_json_file(get_config_dir() / filename)
    user_table = read_user_json(userdata)
    if replace_defaults and user_table:
        return dict(user_table)
    table.update(user_table)
    return table
