"""Read/write i18n JSON and YAML files."""

import json
from pathlib import Path
from typing import Any, Union

import yaml


FILE_EXT_JSON = ".json"
YAML_EXTENSIONS = (".yml", ".yaml")
WATCHED_EXTENSIONS = (FILE_EXT_JSON,) + YAML_EXTENSIONS

PathLike = Union[str, Path]


def is_data_file(file_path: PathLike) -> bool:
    """Return True for files with a JSON or YAML extension."""
    return Path(file_path).suffix.lower() in WATCHED_EXTENSIONS


def parse_data(file_path: PathLike, text: str) -> Any:
    """
    Parse file content according to the file extension.

    Args:
        file_path: Path the content was read from
        text: Raw file content

    Returns:
        Parsed value; ``.json`` files are parsed as JSON, anything else as YAML

    Raises:
        json.JSONDecodeError: If a JSON file is invalid
        yaml.YAMLError: If a YAML file is invalid
    """
    if Path(file_path).suffix.lower() == FILE_EXT_JSON:
        return json.loads(text)
    return yaml.safe_load(text)


def dump_data(file_path: PathLike, data: Any) -> str:
    """
    Serialize data according to the file extension.

    JSON is pretty-printed with a 2-space indent; YAML is written in block
    style with key order preserved.

    Args:
        file_path: Destination path (only the extension is used)
        data: Value to serialize

    Returns:
        Serialized text
    """
    if Path(file_path).suffix.lower() == FILE_EXT_JSON:
        return json.dumps(data, ensure_ascii=False, indent=2) + "\n"
    return yaml.safe_dump(
        data,
        allow_unicode=True,
        default_flow_style=False,
        sort_keys=False,
    )


def read_data_file(file_path: PathLike) -> Any:
    """
    Read and parse a single i18n file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If the file cannot be read
    """
    with open(file_path, "r", encoding="utf-8") as f:
        return parse_data(file_path, f.read())


def write_data_file(file_path: PathLike, data: Any) -> None:
    """
    Write i18n data to a JSON or YAML file.

    Args:
        file_path: Path to output file
        data: Dictionary of translation keys and values
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    text = dump_data(file_path, data)
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(text)
