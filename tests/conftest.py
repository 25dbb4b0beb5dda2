from pathlib import Path

import pytest

# Character-level rules, then phrase-level rules working on their output
CHARACTER_RULES = "\n".join(
    [
        "门\t門",
        "户\t戶",
        "发\t發 髮",
        "头\t頭",
    ],
)
PHRASE_RULES = "\n".join(
    [
        "頭發\t頭髮",
        "門戶\t門戶網站",
    ],
)


@pytest.fixture
def rule_file(tmp_path) -> Path:
    """A small character-level rule file."""
    path = tmp_path / "characters.txt"
    path.write_text(CHARACTER_RULES + "\n", encoding="utf-8")
    return path


@pytest.fixture
def phrase_file(tmp_path) -> Path:
    """A phrase-level rule file meant to run after `rule_file`."""
    path = tmp_path / "phrases.txt"
    path.write_text(PHRASE_RULES + "\n", encoding="utf-8")
    return path


@pytest.fixture
def opencc_data_dir(tmp_path) -> Path:
    """A fake OpenCC data directory with both built-in rule sets."""
    data_dir = tmp_path / "opencc"
    data_dir.mkdir()
    (data_dir / "STCharacters.txt").write_text(
        "发\t發 髮\n头\t頭\n", encoding="utf-8"
    )
    (data_dir / "STPhrases.txt").write_text("头发\t頭髮\n", encoding="utf-8")
    (data_dir / "TSCharacters.txt").write_text(
        "發\t发\n髮\t发\n頭\t头\n", encoding="utf-8"
    )
    (data_dir / "TSPhrases.txt").write_text("", encoding="utf-8")
    return data_dir
