"""Layered conversion dictionaries built from OpenCC-style rule text.

A rule file holds one rule per line: the source phrase, a TAB, then one
or more SPACE-separated replacements of which only the first is used.
Every loaded file becomes one layer; chained dictionaries apply their
layers one after another.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import BinaryIO, Optional

from src.custom_data_structures.PrefixTree.PrefixTree import PrefixTree


def parse_rule_line(line: str) -> Optional[tuple[str, str]]:
    """Parse a single rule line into a (key, value) pair.

    Args:
        line (str): A raw line, with or without its line terminator.

    Returns:
        Optional[tuple[str, str]]: The parsed rule, or None for a line
        without a TAB, with an empty key, or with an empty first value.

    """
    key, sep, values = line.rstrip("\r\n").partition("\t")
    if not sep or not key:
        return None

    value = values.partition(" ")[0]
    if not value:
        return None
    return key, value


def split_lines(raw: str) -> Iterator[str]:
    """Yield the lines of a text blob, accepting both LF and CRLF endings."""
    for line in raw.split("\n"):
        yield line[:-1] if line.endswith("\r") else line


def decode_lines(
    reader: Iterable[bytes],
    encoding: str = "utf-8",
) -> Iterator[str]:
    """Decode raw lines one by one, skipping those that fail to decode."""
    for number, raw_line in enumerate(reader, start=1):
        try:
            yield raw_line.decode(encoding)
        except UnicodeDecodeError:
            logging.debug("Skipping undecodable line %d", number)


def scan(tree: PrefixTree, text: str) -> Iterator[tuple[int, int, str]]:
    """Run one greedy longest-match pass of `tree` over `text`.

    Yields:
        tuple[int, int, str]: `(start, end, replacement)` for every step.
        The steps are contiguous and together cover the whole text.

    """
    position = 0
    length = len(text)
    while position < length:
        match = tree.longest_prefix_match(text, position)
        # A zero-length match can only come from an empty key
        if match is not None and match[0] > 0:
            consumed, value = match
            yield position, position + consumed, value
            position += consumed
        else:
            yield position, position + 1, text[position]
            position += 1


class Dictionary:
    """An ordered, non-empty sequence of prefix trees used for conversion."""

    def __init__(self, layers: Sequence[PrefixTree]) -> None:
        """Initialize the dictionary from already built layers.

        The dictionary takes ownership of the layers: they are frozen and
        reject any further insertion.

        Args:
            layers (Sequence[PrefixTree]): The layers, in application order.

        Raises:
            ValueError: If no layer is given.

        """
        if not layers:
            raise ValueError("A dictionary needs at least one layer.")
        for layer in layers:
            layer.freeze()
        self._layers = tuple(layers)

    def __repr__(self) -> str:
        sizes = ", ".join(str(len(layer)) for layer in self._layers)
        return f"Dictionary(layers=[{sizes}])"

    def __add__(self, other: "Dictionary") -> "Dictionary":
        if not isinstance(other, Dictionary):
            return NotImplemented
        return self.chain(other)

    @property
    def layers(self) -> tuple[PrefixTree, ...]:
        """Return the layers in the order they are applied."""
        return self._layers

    @property
    def rule_count(self) -> int:
        """Return the number of rules across all layers."""
        return sum(len(layer) for layer in self._layers)

    @classmethod
    def load_lines(cls, lines: Iterable[str]) -> "Dictionary":
        """Load a single-layer dictionary from rule lines.

        Malformed lines are skipped. When a key appears more than once,
        the last line wins.

        Args:
            lines (Iterable[str]): The rule lines, in file order.

        Returns:
            Dictionary: A dictionary with exactly one layer.

        """
        tree = PrefixTree()
        skipped = 0
        for line in lines:
            rule = parse_rule_line(line)
            if rule is None:
                skipped += 1
                continue
            tree.insert(*rule)

        logging.debug(
            "Loaded %d rules into a new layer, skipped %d lines",
            len(tree),
            skipped,
        )
        return cls([tree])

    @classmethod
    def load_str(cls, raw: str) -> "Dictionary":
        """Load a single-layer dictionary from a whole rule text."""
        return cls.load_lines(split_lines(raw))

    @classmethod
    def load(cls, reader: BinaryIO, encoding: str = "utf-8") -> "Dictionary":
        """Load a single-layer dictionary by streaming a byte source.

        Lines that cannot be decoded are skipped like malformed ones.

        Args:
            reader (BinaryIO): A readable binary file-like object.
            encoding (str): The text encoding of the rules.

        Returns:
            Dictionary: A dictionary with exactly one layer.

        """
        return cls.load_lines(decode_lines(reader, encoding))

    @classmethod
    def load_file(cls, path: Path, encoding: str = "utf-8") -> "Dictionary":
        """Load a single-layer dictionary from a rule file.

        Args:
            path (Path): The path of the rule file.
            encoding (str): The text encoding of the rules.

        Raises:
            FileNotFoundError: If the file specified by `path` does not exist.

        Returns:
            Dictionary: A dictionary with exactly one layer.

        """
        try:
            with path.open("rb") as file:
                dictionary = cls.load(file, encoding)
        except FileNotFoundError as e:
            raise FileNotFoundError(
                f"Dictionary file not found: {path}",
            ) from e

        logging.info(
            "Loaded %s rules from %s",
            f"{dictionary.rule_count:,}",
            path,
        )
        return dictionary

    def chain(self, other: "Dictionary") -> "Dictionary":
        """Return a new dictionary applying this one's layers, then `other`'s.

        Neither dictionary is modified. The layers are frozen, so sharing
        them between both dictionaries is safe.

        Args:
            other (Dictionary): The dictionary whose layers run afterwards.

        Returns:
            Dictionary: The composed dictionary.

        """
        return Dictionary(self._layers + other.layers)

    def replace_all(self, text: str) -> str:
        """Convert `text` by running every layer over it in order.

        Args:
            text (str): The text to convert.

        Returns:
            str: The converted text.

        """
        for layer in self._layers:
            text = "".join(piece for _, _, piece in scan(layer, text))
        return text
