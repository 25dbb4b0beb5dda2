from pathlib import Path

import pytest

from src.converter.config import (
    ConfigBoolParsingError,
    ConfigNotFoundError,
    ConverterConfig,
    load_config_file,
    parse_bool,
    parse_path_list,
)

# Test data for valid configurations
VALID_CONFIG = """
# Converter configuration
dictionaries = {first}, {second}
builtin = s2t
opencc_data_dir = {data_dir}
log_details = yes
log_file = {log_file}
"""

MISSING_DICTIONARIES_CONFIG = """
opencc_data_dir = /tmp
log_details = false
"""

INVALID_BOOL_CONFIG = """
dictionaries = {first}
log_details = maybe
"""

UNKNOWN_BUILTIN_CONFIG = """
builtin = s2x
"""


# Test parse_bool function
@pytest.mark.parametrize(
    "value, expected",
    [
        ("true", True),
        ("True", True),
        ("TRUE", True),
        ("1", True),
        ("yes", True),
        ("false", False),
        ("False", False),
        ("FALSE", False),
        ("0", False),
        ("no", False),
    ],
)
def test_parse_bool_valid(value, expected):
    """Test valid boolean values."""
    assert parse_bool("test_key", value) == expected


@pytest.mark.parametrize("value", ["maybe", "2", "yess", "tru", "invalid"])
def test_parse_bool_invalid(value):
    """Test invalid boolean values."""
    with pytest.raises(ConfigBoolParsingError) as excinfo:
        parse_bool("test_key", value)
    assert "Invalid boolean value for key 'test_key'" in str(excinfo.value)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("a.txt", [Path("a.txt")]),
        ("a.txt, b.txt", [Path("a.txt"), Path("b.txt")]),
        (" a.txt ,, b.txt ,", [Path("a.txt"), Path("b.txt")]),
        ("", []),
    ],
)
def test_parse_path_list(value, expected):
    """Test splitting of comma-separated paths."""
    assert parse_path_list(value) == expected


# Test ConverterConfig class
def test_converter_config_defaults():
    """Test ConverterConfig initialization and default log file."""
    config = ConverterConfig(
        dictionary_paths=[Path("a.txt")],
        builtin=None,
        opencc_data_dir=None,
        log_details=False,
    )

    assert config.dictionary_paths == [Path("a.txt")]
    assert config.builtin is None
    assert config.log_file is None


def test_converter_config_repr():
    """Test the string representation of ConverterConfig."""
    config = ConverterConfig(
        dictionary_paths=[Path("a.txt"), Path("b.txt")],
        builtin="t2s",
        opencc_data_dir=None,
        log_details=True,
    )

    repr_str = repr(config)
    assert "Converter configuration settings" in repr_str
    assert "Dictionaries: a.txt, b.txt" in repr_str
    assert "Built-in dictionary: t2s" in repr_str
    assert "OpenCC data directory: NONE" in repr_str
    assert "Log details: YES" in repr_str
    assert "Log file: DEFAULT" in repr_str


# Test load_config_file function
def test_load_valid_config(tmp_path, rule_file, phrase_file):
    """Test loading a valid configuration file."""
    config_path = tmp_path / "config.txt"
    config_path.write_text(
        VALID_CONFIG.format(
            first=rule_file,
            second=phrase_file,
            data_dir=tmp_path,
            log_file=tmp_path / "converter.log",
        ),
    )

    config = load_config_file(config_path)

    assert config.dictionary_paths == [rule_file, phrase_file]
    assert config.builtin == "s2t"
    assert config.opencc_data_dir == tmp_path
    assert config.log_details is True
    assert config.log_file == tmp_path / "converter.log"


def test_load_config_missing_file():
    """Test loading a configuration from a non-existent file."""
    with pytest.raises(FileNotFoundError) as excinfo:
        load_config_file(Path("/non/existent/path"))
    assert "Missing required configuration file" in str(excinfo.value)


def test_load_config_missing_dictionaries(tmp_path):
    """Test configuration without any dictionary."""
    config_path = tmp_path / "config.txt"
    config_path.write_text(MISSING_DICTIONARIES_CONFIG)

    with pytest.raises(ConfigNotFoundError) as excinfo:
        load_config_file(config_path)
    assert (
        "Missing required configuration: "
        "'dictionaries'" in str(excinfo.value)
    )


def test_load_config_builtin_only(tmp_path):
    """A built-in dictionary alone is a complete configuration."""
    config_path = tmp_path / "config.txt"
    config_path.write_text("BUILTIN = T2S\n")

    config = load_config_file(config_path)

    assert config.dictionary_paths == []
    assert config.builtin == "t2s"
    assert config.log_details is False


def test_load_config_unknown_builtin(tmp_path):
    """Test configuration naming a built-in dictionary that doesn't exist."""
    config_path = tmp_path / "config.txt"
    config_path.write_text(UNKNOWN_BUILTIN_CONFIG)

    with pytest.raises(ConfigNotFoundError) as excinfo:
        load_config_file(config_path)
    assert "Unknown built-in dictionary 's2x'" in str(excinfo.value)


def test_load_config_invalid_bool(tmp_path, rule_file):
    """Test configuration with an invalid boolean value."""
    config_path = tmp_path / "config.txt"
    config_path.write_text(INVALID_BOOL_CONFIG.format(first=rule_file))

    with pytest.raises(ConfigBoolParsingError) as excinfo:
        load_config_file(config_path)
    assert (
        "Invalid boolean value for key "
        "'log_details'" in str(excinfo.value)
    )


def test_load_config_missing_dictionary_file(tmp_path):
    """Test that FileNotFoundError is raised if a dictionary doesn't exist."""
    non_existent = tmp_path / "non_existent.txt"

    config_path = tmp_path / "config.txt"
    config_path.write_text(f"dictionaries = {non_existent}\n")

    with pytest.raises(FileNotFoundError) as excinfo:
        load_config_file(config_path)
    assert (
        f"The required file {non_existent} "
        "doesn't exist" in str(excinfo.value)
    )


def test_load_config_comments_and_invalid_lines_ignored(tmp_path, rule_file):
    """Test that comments, empty and malformed lines are ignored."""
    config_content = f"""
    # This is a comment
    dictionaries = {rule_file}
    invalid_line_without_equals
    # Another comment
    LOG_DETAILS = 1
    """

    config_path = tmp_path / "config.txt"
    config_path.write_text(config_content)

    config = load_config_file(config_path)

    assert config.dictionary_paths == [rule_file]
    assert config.builtin is None
    assert config.log_details is True
