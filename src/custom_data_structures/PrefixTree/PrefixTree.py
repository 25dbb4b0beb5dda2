"""This module represents the implementation of a path-compressed prefix
tree that maps string keys to replacement values and answers
longest-prefix queries against arbitrary text.
"""

from typing import Optional, Union


class LeafNode:
    """Represent a compressed node holding the only rule below it."""

    __slots__ = ("suffix", "value")

    def __init__(self, suffix: str, value: str) -> None:
        """Initialize a new leaf node.

        Attributes:
            suffix (str): The rest of the key that still has to be
            matched below this point.
            value (str): The replacement value of the key.

        """
        self.suffix = suffix
        self.value = value

    def __repr__(self) -> str:
        return f"LeafNode(suffix={self.suffix!r}, value={self.value!r})"


class BranchNode:
    """Represent a branching node of the prefix tree."""

    __slots__ = ("children", "value")

    def __init__(self, value: Optional[str] = None) -> None:
        """Initialize a new branch node.

        Attributes:
            value (Optional[str]): The value of the key ending exactly
            at this node, if any.
            children (dict): A dictionary mapping the next character
            to the corresponding child node.

        """
        self.value = value
        self.children: dict[str, Node] = {}

    def __repr__(self) -> str:
        return (
            f"BranchNode(value={self.value!r}, "
            f"children={sorted(self.children)!r})"
        )


Node = Union[LeafNode, BranchNode]


class FrozenTreeError(RuntimeError):
    """Raised when inserting into a tree that a dictionary already owns."""


def split_leaf(leaf: LeafNode) -> BranchNode:
    """Convert a compressed leaf into an equivalent branch node.

    The leaf's own rule is kept: as the branch value when its suffix
    is fully consumed, otherwise as a single child one character deeper.

    Args:
        leaf (LeafNode): The leaf to convert.

    Returns:
        BranchNode: A branch node storing the same rule.

    """
    if not leaf.suffix:
        return BranchNode(leaf.value)

    branch = BranchNode()
    branch.children[leaf.suffix[0]] = LeafNode(leaf.suffix[1:], leaf.value)
    return branch


class PrefixTree:
    """Represents the prefix tree data structure."""

    def __init__(self) -> None:
        """Initialize an empty tree (a branch root without any value)."""
        self.root = BranchNode()
        self._size = 0
        self._frozen = False

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the tree read-only for good."""
        self._frozen = True

    def insert(self, key: str, value: str) -> None:
        """Insert a rule into the tree, overwriting an existing value.

        Callers must not insert an empty key: its value is stored on the
        root and would match before any character of a query.

        Args:
            key (str): The source phrase.
            value (str): The replacement phrase.

        Raises:
            FrozenTreeError: If the tree has been frozen.

        """
        if self._frozen:
            raise FrozenTreeError("Cannot insert into a frozen prefix tree.")

        node = self.root
        index = 0
        while index < len(key):
            char = key[index]
            child = node.children.get(char)

            # Nothing shares this prefix yet, store the rest compressed
            if child is None:
                node.children[char] = LeafNode(key[index + 1 :], value)
                self._size += 1
                return

            if isinstance(child, LeafNode):
                if child.suffix == key[index + 1 :]:
                    child.value = value
                    return
                # The walk has to branch here, so expand the leaf
                child = split_leaf(child)
                node.children[char] = child

            node = child
            index += 1

        if node.value is None:
            self._size += 1
        node.value = value

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value stored for exactly `key`.

        Args:
            key (str): The key to look up.
            default (Optional[str]): Returned when the key is absent.

        Returns:
            Optional[str]: The stored value or `default`.

        """
        node: Node = self.root
        for index, char in enumerate(key):
            if isinstance(node, LeafNode):
                return node.value if node.suffix == key[index:] else default
            child = node.children.get(char)
            if child is None:
                return default
            node = child

        if isinstance(node, LeafNode):
            return node.value if not node.suffix else default
        return default if node.value is None else node.value

    def longest_prefix_match(
        self,
        query: str,
        start: int = 0,
    ) -> Optional[tuple[int, str]]:
        """Find the longest stored key that is a prefix of `query[start:]`.

        Args:
            query (str): The text to match against.
            start (int): The position in `query` where matching begins.

        Returns:
            Optional[tuple[int, str]]: The number of characters the key
            consumed and its value, or None when no key matches.

        """
        node = self.root
        best: Optional[tuple[int, str]] = None
        position = start
        end = len(query)

        while True:
            # Remember the deepest valued node seen on this path
            if node.value is not None:
                best = (position - start, node.value)
            if position >= end:
                return best

            child = node.children.get(query[position])
            if child is None:
                return best
            position += 1

            if isinstance(child, LeafNode):
                if query.startswith(child.suffix, position):
                    return (position - start + len(child.suffix), child.value)
                return best

            node = child
