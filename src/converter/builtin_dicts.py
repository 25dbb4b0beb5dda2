"""Process-wide OpenCC dictionaries, built lazily on first use.

The rule files themselves are not shipped with the package: point
`set_data_dir` at the `data/dictionary` directory of an OpenCC checkout.
"""

import logging
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from .dictionary import Dictionary, decode_lines

# Name -> rule files concatenated into a single layer
BUILTIN_DICTIONARIES: dict[str, tuple[str, ...]] = {
    # Simplified Chinese to Traditional Chinese
    "s2t": ("STCharacters.txt", "STPhrases.txt"),
    # Traditional Chinese to Simplified Chinese
    "t2s": ("TSCharacters.txt", "TSPhrases.txt"),
}

_data_dir: Optional[Path] = None
_dictionaries: dict[str, Dictionary] = {}
_lock = threading.Lock()


def set_data_dir(data_dir: Path) -> None:
    """Set the directory holding the OpenCC rule files.

    Dictionaries already built from the previous directory are dropped.

    Args:
        data_dir (Path): The OpenCC `data/dictionary` directory.

    """
    global _data_dir
    with _lock:
        _data_dir = data_dir
        _dictionaries.clear()


def get_data_dir() -> Optional[Path]:
    """Return the configured OpenCC data directory, if any."""
    return _data_dir


def _read_rule_lines(paths: list[Path]) -> Iterator[str]:
    """Yield the lines of every rule file in turn, skipping bad bytes."""
    for path in paths:
        try:
            file = path.open("rb")
        except FileNotFoundError as e:
            raise FileNotFoundError(
                f"Built-in dictionary file not found: {path}",
            ) from e
        with file:
            yield from decode_lines(file)


def _build(name: str, data_dir: Path) -> Dictionary:
    paths = [data_dir / file for file in BUILTIN_DICTIONARIES[name]]
    dictionary = Dictionary.load_lines(_read_rule_lines(paths))
    logging.info(
        "Built-in dictionary '%s' built with %s rules",
        name,
        f"{dictionary.rule_count:,}",
    )
    return dictionary


def get_builtin_dictionary(name: str) -> Dictionary:
    """Get a built-in dictionary, building it on the first request.

    Args:
        name (str): One of the keys of `BUILTIN_DICTIONARIES`.

    Raises:
        KeyError: If `name` is not a built-in dictionary.
        RuntimeError: If no data directory has been configured.
        FileNotFoundError: If one of the rule files is missing.

    Returns:
        Dictionary: The shared, read-only dictionary.

    """
    if name not in BUILTIN_DICTIONARIES:
        raise KeyError(
            f"Unknown built-in dictionary '{name}'. Available: "
            f"{', '.join(sorted(BUILTIN_DICTIONARIES))}",
        )

    with _lock:
        dictionary = _dictionaries.get(name)
        if dictionary is None:
            if _data_dir is None:
                raise RuntimeError(
                    "OpenCC data directory not set. "
                    "Call set_data_dir() first.",
                )
            dictionary = _build(name, _data_dir)
            _dictionaries[name] = dictionary
        return dictionary


def clear_builtin_dictionaries() -> None:
    """Drop every built-in dictionary built so far."""
    with _lock:
        _dictionaries.clear()
