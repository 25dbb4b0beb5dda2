"""Benchmark the conversion pass against simpler replacement strategies."""

import gc
import json
import random
import re
import time
import tracemalloc
from pathlib import Path
from typing import Callable

import matplotlib.pyplot as plt
import psutil

from benchmarks.run_benchmarks_load import (
    ALPHABET,
    WORKDIR,
    generate_rule_file,
)
from src.converter.dictionary import Dictionary, parse_rule_line

RESULTS_DIR = (
    Path(__file__).parent.parent / "static" / "benchmarks" / "replace_results"
)
RULE_COUNT = 20_000
TEXT_SIZES = [1_000, 10_000, 100_000]


def load_rules(path: Path) -> dict[str, str]:
    """Read the rules of `path` into a plain mapping, last line winning."""
    rules: dict[str, str] = {}
    with path.open("r", encoding="utf-8") as file:
        for line in file:
            rule = parse_rule_line(line)
            if rule is not None:
                rules[rule[0]] = rule[1]
    return rules


def naive_replace(rules: dict[str, str]) -> Callable[[str], str]:
    """Build a converter calling `str.replace` for each key, longest first.

    Replacements can be converted again by later keys, so the output only
    matches the tree pass for non-overlapping rule sets.
    """
    ordered = sorted(
        rules.items(),
        key=lambda item: len(item[0]),
        reverse=True,
    )

    def convert(text: str) -> str:
        for key, value in ordered:
            text = text.replace(key, value)
        return text

    return convert


def regex_replace(rules: dict[str, str]) -> Callable[[str], str]:
    """Build a converter from one alternation of all keys, longest first."""
    pattern = re.compile(
        "|".join(
            re.escape(key)
            for key in sorted(rules, key=len, reverse=True)
        ),
    )

    def convert(text: str) -> str:
        return pattern.sub(lambda match: rules[match.group(0)], text)

    return convert


def time_converter(convert: Callable[[str], str], text: str) -> float:
    """Return the execution time of one conversion in milliseconds."""
    start = time.perf_counter()
    convert(text)
    return (time.perf_counter() - start) * 1000


def main() -> None:
    """Main function."""
    WORKDIR.mkdir(parents=True, exist_ok=True)
    RESULTS_DIR.mkdir(parents=True, exist_ok=True)

    rules_path = WORKDIR / f"rules{RULE_COUNT}.txt"
    if not rules_path.exists():
        generate_rule_file(rules_path, RULE_COUNT)

    rules = load_rules(rules_path)
    tracemalloc.start()
    dictionary = Dictionary.load_file(rules_path)
    _, tree_peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    converters: dict[str, Callable[[str], str]] = {
        "Prefix Tree": dictionary.replace_all,
        "Regex Alternation": regex_replace(rules),
        "Naive Replace": naive_replace(rules),
    }

    rng = random.Random(1)
    results: dict[str, dict[int | str, float | int]] = {
        name: {} for name in converters
    }
    for size in TEXT_SIZES:
        text = "".join(rng.choices(ALPHABET, k=size))
        print(f"\n--- Converting {size:,} characters ---")
        for name, convert in converters.items():
            elapsed = time_converter(convert, text)
            results[name][size] = elapsed
            print(f"{name}: {elapsed:.2f} ms")
        gc.collect()

    results["Prefix Tree"]["peak_traced_memory_bytes"] = tree_peak
    results["Prefix Tree"]["rss_bytes"] = psutil.Process().memory_info().rss

    try:
        plt.figure(figsize=(8, 5))
        width = 0.25
        for offset, name in enumerate(converters):
            x = [i + offset * width for i in range(len(TEXT_SIZES))]
            y_values = [results[name][size] for size in TEXT_SIZES]
            plt.bar(x, y_values, width, label=name)
        plt.xticks(
            [i + width for i in range(len(TEXT_SIZES))],
            [f"{size:,}" for size in TEXT_SIZES],
        )
        plt.xlabel("Characters")
        plt.ylabel("Execution Time (ms)")
        plt.title(f"Conversion Time ({RULE_COUNT:,} rules)")
        plt.legend()
        plt.tight_layout()
        plt.savefig(RESULTS_DIR / "benchmark_replace.png")
    finally:
        plt.close("all")

    results_json_path = RESULTS_DIR / "results.json"
    with open(results_json_path, "w", encoding="utf-8") as f:
        json.dump(results, f, indent=4)
    print(f"\nResults written to {results_json_path}")


if __name__ == "__main__":
    main()
