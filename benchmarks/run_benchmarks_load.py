"""Benchmark loading dictionaries of growing size."""

import gc
import json
import random
import time
import tracemalloc
from pathlib import Path

import matplotlib.pyplot as plt
import psutil

from src.converter.dictionary import Dictionary

WORKDIR = Path("/tmp/converter_benchmarks")
RESULTS_DIR = (
    Path(__file__).parent.parent / "static" / "benchmarks" / "load_results"
)
RULE_COUNTS = [1_000, 10_000, 50_000, 100_000, 250_000]
REPEATS = 3
# CJK Unified Ideographs, the bulk of real OpenCC rule keys
ALPHABET = [chr(code) for code in range(0x4E00, 0x4E00 + 3000)]


def generate_rule_file(path: Path, rule_count: int, seed: int = 0) -> None:
    """Write a synthetic rule file of `rule_count` lines.

    Args:
        path (Path): Where to write the rules.
        rule_count (int): The number of lines to generate.
        seed (int): The random seed, so that runs are comparable.

    """
    rng = random.Random(seed)
    with path.open("w", encoding="utf-8") as file:
        for _ in range(rule_count):
            key = "".join(rng.choices(ALPHABET, k=rng.randint(1, 6)))
            value = "".join(rng.choices(ALPHABET, k=len(key)))
            alternative = "".join(rng.choices(ALPHABET, k=len(key)))
            file.write(f"{key}\t{value} {alternative}\n")


def benchmark_load(path: Path) -> dict[str, float | int]:
    """Load `path` several times and collect timing and memory metrics.

    Args:
        path (Path): The rule file to load.

    Returns:
        dict[str, float | int]: Average load time, peak traced memory
        and the resident set size growth of the process.

    """
    timings: list[float] = []
    process = psutil.Process()
    rss_before = process.memory_info().rss

    tracemalloc.start()
    rules = 0
    for _ in range(REPEATS):
        start = time.perf_counter()
        dictionary = Dictionary.load_file(path)
        timings.append((time.perf_counter() - start) * 1000)
        rules = dictionary.rule_count
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    rss_after = process.memory_info().rss
    del dictionary
    gc.collect()

    return {
        "rules": rules,
        "average_load_time_ms": sum(timings) / len(timings),
        "peak_traced_memory_bytes": peak,
        "rss_growth_bytes": rss_after - rss_before,
    }


def plot_results(results: dict[int, dict[str, float | int]]) -> None:
    """Save a bar chart of the average load time per rule count."""
    try:
        plt.figure(figsize=(8, 5))
        x = range(len(results))
        y_values = [float(r["average_load_time_ms"]) for r in results.values()]
        plt.bar(x, y_values, color="steelblue")
        plt.xticks(x, [f"{count:,}" for count in results])
        plt.xlabel("Rule lines")
        plt.ylabel("Load Time (ms)")
        plt.title("Dictionary Load Time")

        for i, v in enumerate(y_values):
            plt.text(i, v + 0.01, f"{v:.2f}", ha="center", va="bottom")

        plt.tight_layout()
        plt.savefig(RESULTS_DIR / "benchmark_load.png")
    finally:
        plt.close("all")


def main() -> None:
    """Main function."""
    WORKDIR.mkdir(parents=True, exist_ok=True)
    RESULTS_DIR.mkdir(parents=True, exist_ok=True)

    results: dict[int, dict[str, float | int]] = {}
    for rule_count in RULE_COUNTS:
        path = WORKDIR / f"rules{rule_count}.txt"
        if not path.exists():
            generate_rule_file(path, rule_count)

        print(f"\n--- Loading {rule_count:,} rule lines ---")
        results[rule_count] = benchmark_load(path)
        print(
            f"Rules: {results[rule_count]['rules']:,}, average load time: "
            f"{results[rule_count]['average_load_time_ms']:.2f} ms",
        )

    plot_results(results)

    results_json_path = RESULTS_DIR / "results.json"
    with open(results_json_path, "w", encoding="utf-8") as f:
        json.dump(results, f, indent=4)
    print(f"\nResults written to {results_json_path}")


if __name__ == "__main__":
    main()
