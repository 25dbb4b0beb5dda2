"""Build layered dictionaries from files and convert text with them."""

import logging
import time
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Optional

from .builtin_dicts import get_builtin_dictionary
from .dictionary import Dictionary
from .logger import log


def build_dictionary(
    dictionary_paths: Sequence[Path],
    builtin: Optional[str] = None,
) -> Dictionary:
    """Chain every rule file, then the built-in dictionary, into one pipeline.

    Args:
        dictionary_paths (Sequence[Path]): Rule files, one layer each.
        builtin (Optional[str]): Name of a built-in dictionary to append.

    Raises:
        ValueError: If neither a rule file nor a built-in name is given.
        FileNotFoundError: If a rule file does not exist.

    Returns:
        Dictionary: The composed dictionary.

    """
    dictionaries = [Dictionary.load_file(path) for path in dictionary_paths]
    if builtin is not None:
        dictionaries.append(get_builtin_dictionary(builtin))

    if not dictionaries:
        raise ValueError("No dictionary was given to convert with.")

    composed = dictionaries[0]
    for dictionary in dictionaries[1:]:
        composed = composed.chain(dictionary)

    logging.info(
        "Dictionary ready with %d layers and %s rules",
        len(composed.layers),
        f"{composed.rule_count:,}",
    )
    return composed


def convert_text(
    dictionary: Dictionary,
    text: str,
    source: str = "<text>",
    log_details: bool = False,
) -> str:
    """Convert `text`, optionally logging how long it took.

    Args:
        dictionary (Dictionary): The dictionary to convert with.
        text (str): The text to convert.
        source (str): A label for the log record.
        log_details (bool): Whether to log the conversion.

    Returns:
        str: The converted text.

    """
    start_time = time.perf_counter()
    converted = dictionary.replace_all(text)
    duration = (time.perf_counter() - start_time) * 1000  # in milliseconds

    if log_details:
        log(
            datetime.now().isoformat(timespec="seconds"),
            source,
            len(text),
            len(dictionary.layers),
            duration,
        )
    return converted


def write_output(output_path: Path, text: str) -> None:
    """Write converted text as UTF-8, creating missing parent directories.

    Line endings are written exactly as they appear in `text`.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="") as file:
        file.write(text)


def convert_file(
    dictionary: Dictionary,
    input_path: Path,
    output_path: Optional[Path] = None,
    log_details: bool = False,
) -> str:
    """Convert the contents of a UTF-8 text file.

    Args:
        dictionary (Dictionary): The dictionary to convert with.
        input_path (Path): The file to convert.
        output_path (Optional[Path]): Where to write the result, if anywhere.
        log_details (bool): Whether to log the conversion.

    Raises:
        FileNotFoundError: If the file specified by `input_path`
        does not exist.

    Returns:
        str: The converted text.

    """
    try:
        # newline="" keeps the original line endings untouched
        with input_path.open("r", encoding="utf-8", newline="") as file:
            text = file.read()
    except FileNotFoundError as e:
        raise FileNotFoundError(f"File not found: {input_path}") from e

    converted = convert_text(dictionary, text, str(input_path), log_details)

    if output_path is not None:
        write_output(output_path, converted)
    return converted
