"""Configuration parser for the converter."""

from pathlib import Path
from typing import Optional

from .builtin_dicts import BUILTIN_DICTIONARIES


class ConfigBoolParsingError(Exception):
    """Raised when the parsing of bool strings in
    the config file was not successful.
    """


class ConfigNotFoundError(Exception):
    """Raised when a required configuration setting is not provided."""


class ConverterConfig:
    """A class to save converter configuration settings."""

    def __init__(
        self,
        dictionary_paths: list[Path],
        builtin: Optional[str],
        opencc_data_dir: Optional[Path],
        log_details: bool,
        log_file: Optional[Path] = None,
    ) -> None:
        """Initialize the converter configuration.

        Args:
            dictionary_paths (list[Path]): Rule files, one layer each,
            in the order the layers are applied.
            builtin (Optional[str]): Name of a built-in dictionary applied
            after the rule files, if any.
            opencc_data_dir (Optional[Path]): Directory holding the
            OpenCC rule files for built-in dictionaries.
            log_details (bool): Whether every conversion is logged.
            log_file (Optional[Path]): The file log records are written to,
            or None for the logger's default location.

        """
        self.dictionary_paths = dictionary_paths
        self.builtin = builtin
        self.opencc_data_dir = opencc_data_dir
        self.log_details = log_details
        self.log_file = log_file

    def __repr__(self) -> str:
        """Return a string representation of the configuration object.

        Returns:
            str: A formatted string representing the configuration settings.

        """
        paths = ", ".join(str(path) for path in self.dictionary_paths)
        return f"""
                Converter configuration settings:
                Dictionaries: {paths or "NONE"}
                Built-in dictionary: {self.builtin or "NONE"}
                OpenCC data directory: {self.opencc_data_dir or "NONE"}
                Log details: {"YES" if self.log_details else "NO"}
                Log file: {self.log_file or "DEFAULT"}
            """


def parse_bool(key: str, val: str) -> bool:
    """Parse given values into boolean ones (True or False).

    Args:
        key (str): The key to parse the boolean for.
        val (str): The value to be parsed to boolean.

    Raises:
        ConfigBoolParsingError: If an error occured
        while parsing the value to boolean.

    Returns:
        bool: True or False depending on the output of the parser.

    """
    if val.strip().lower() in {"true", "1", "yes"}:
        return True
    if val.strip().lower() in {"false", "0", "no"}:
        return False

    raise ConfigBoolParsingError(
        f"Invalid boolean value for key '{key}' in the configuration file. "
        "Expected 'true', 'false', '1', '0', 'yes', or 'no' "
        "(case-insensitive).",
    )


def parse_path_list(value: str) -> list[Path]:
    """Split a comma-separated list of paths, dropping empty entries."""
    return [Path(item.strip()) for item in value.split(",") if item.strip()]


def load_config_file(config_file_path: Path) -> ConverterConfig:
    """Load and parse the configuration file.

    Args:
        config_file_path (Path): Path to the config file.

    Raises:
        ConfigNotFoundError: If no dictionary is configured or the
        built-in dictionary name is unknown.
        FileNotFoundError: If a file does not exist.

    Returns:
        ConverterConfig: Parsed config object.

    """
    if not config_file_path.exists():
        raise FileNotFoundError(
            f"Missing required configuration file: '{config_file_path}'. "
            "Please ensure the file exists and the path is correct.",
        )

    dictionary_paths: list[Path] = []
    builtin: Optional[str] = None
    opencc_data_dir: Optional[Path] = None
    log_details = False
    log_file: Optional[Path] = None

    with config_file_path.open("r", encoding="utf-8") as file:
        for line in file:
            line = line.strip()

            # Skip blank lines and comments
            if not line or line.startswith("#"):
                continue

            key, sep, value = line.partition("=")
            if sep != "=":
                continue

            key = key.strip().lower()
            value = value.strip()

            if key == "dictionaries":
                dictionary_paths = parse_path_list(value)
            elif key == "builtin":
                builtin = value.lower() or None
            elif key == "opencc_data_dir":
                opencc_data_dir = Path(value)
            elif key == "log_details":
                log_details = parse_bool("log_details", value)
            elif key == "log_file":
                log_file = Path(value)

    if not dictionary_paths and builtin is None:
        raise ConfigNotFoundError(
            "Missing required configuration: 'dictionaries'. "
            "Please ensure the config file includes a 'DICTIONARIES' "
            "or a 'BUILTIN' line.",
        )

    if builtin is not None and builtin not in BUILTIN_DICTIONARIES:
        raise ConfigNotFoundError(
            f"Unknown built-in dictionary '{builtin}'. Expected one of: "
            f"{', '.join(sorted(BUILTIN_DICTIONARIES))}.",
        )

    for path in dictionary_paths:
        if not path.exists():
            raise FileNotFoundError(
                f"The required file {path} doesn't exist.",
            )

    return ConverterConfig(
        dictionary_paths,
        builtin,
        opencc_data_dir,
        log_details,
        log_file,
    )
