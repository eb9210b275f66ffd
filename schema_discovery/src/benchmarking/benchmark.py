#!/usr/bin/env python3
"""
Benchmarking and profiling suite for schema discovery.

Measures performance across document complexity, array width and nesting
depth, and records memory growth during discovery.
"""

import json
import os
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence

import psutil

sys.path.insert(0, str(Path(__file__).parent.parent / "lib"))

from discover_schema import discover_schema
from generate_examples import DocumentGenerator


CORPUS_DIR = Path(__file__).parent / "corpus"
RESULTS_FILE = Path(__file__).parent / "benchmark_results.json"

WIDTHS = (10, 100, 1000, 10000)
DEPTHS = (10, 50, 100, 200)
SHAPES_PER_ARRAY = 5
SAMPLES_PER_CATEGORY = 10


def time_discovery(document: Any, repeat: int = 5) -> float:
    """Average wall time of discover_schema(document) in milliseconds."""
    times = []
    for _ in range(repeat):
        start = time.perf_counter()
        _ = discover_schema(document)
        times.append(time.perf_counter() - start)
    return sum(times) / len(times) * 1000


class BenchmarkSuite:
    """Benchmarking and profiling for schema discovery."""

    def __init__(self, corpus_dir: Path = CORPUS_DIR, repeat: int = 5):
        """Initialize benchmark suite."""
        self.corpus_dir = Path(corpus_dir)
        self.manifest_file = self.corpus_dir / "manifest.json"
        self.repeat = repeat
        self.generator = DocumentGenerator()
        self.results: Dict[str, Any] = {}

    def load_manifest(self) -> List[Dict[str, Any]]:
        """Load corpus manifest; empty when no corpus has been collected."""
        if not self.manifest_file.exists():
            print(f"No corpus manifest at {self.manifest_file}. "
                  "Run fetch_corpus.py or generate_examples.py first.")
            return []
        with open(self.manifest_file) as f:
            return json.load(f)

    def load_document(self, entry: Dict[str, Any]) -> Any:
        """Load the document a manifest entry points at."""
        with open(self.corpus_dir / entry["document_file"]) as f:
            return json.load(f)

    def _group_by_category(self) -> Dict[str, List[Dict[str, Any]]]:
        categories: Dict[str, List[Dict[str, Any]]] = {}
        for entry in self.load_manifest():
            categories.setdefault(entry["category"], []).append(entry)
        return categories

    def benchmark_by_category(self):
        """Benchmark discovery by corpus complexity category."""
        print("=== Benchmarking by Category ===\n")

        by_category = {}
        for category, entries in sorted(self._group_by_category().items()):
            print(f"{category}:")
            times = []

            for entry in entries[:SAMPLES_PER_CATEGORY]:
                elapsed = time_discovery(self.load_document(entry), self.repeat)
                times.append(elapsed)
                print(f"  {entry['name']:<50} {elapsed:8.2f}ms")

            avg = sum(times) / len(times)
            print(f"  Average: {avg:8.2f}ms\n")
            by_category[category] = {"avg_ms": avg, "samples": len(times)}

        self.results["by_category"] = by_category

    def benchmark_by_width(self, widths: Sequence[int] = WIDTHS, shapes: int = SHAPES_PER_ARRAY):
        """Benchmark how performance scales with the number of array elements."""
        print("=== Benchmarking by Array Width ===\n")

        rows = []
        for width in widths:
            document = self.generator.generate_wide_array(width, shapes)
            elapsed = time_discovery(document, self.repeat)
            print(f"  {width:6d} elements: {elapsed:8.2f}ms")
            rows.append({"width": width, "ms": elapsed})

        self.results["by_width"] = rows

    def benchmark_by_depth(self, depths: Sequence[int] = DEPTHS):
        """Benchmark how performance scales with nesting depth."""
        print("\n=== Benchmarking by Nesting Depth ===\n")

        rows = []
        for depth in depths:
            document = self.generator.generate_nested(depth)
            elapsed = time_discovery(document, self.repeat)
            print(f"  depth {depth:4d}: {elapsed:8.2f}ms")
            rows.append({"depth": depth, "ms": elapsed})

        self.results["by_depth"] = rows

    def benchmark_memory_usage(self):
        """Benchmark resident memory growth during discovery."""
        print("\n=== Memory Usage ===\n")

        process = psutil.Process(os.getpid())
        samples: Dict[str, Callable[[], Any]] = {
            category: (lambda entry=entries[0]: self.load_document(entry))
            for category, entries in self._group_by_category().items()
        }
        samples["wide-array"] = lambda: self.generator.generate_wide_array(max(WIDTHS), SHAPES_PER_ARRAY)

        memory = {}
        for label, load in samples.items():
            document = load()

            mem_start = process.memory_info().rss / (1024 * 1024)  # MB
            _ = discover_schema(document)
            mem_end = process.memory_info().rss / (1024 * 1024)  # MB

            memory[label] = mem_end - mem_start
            print(f"  {label:<20} {memory[label]:8.2f} MB")

        self.results["memory_mb"] = memory

    def run_all_benchmarks(self) -> Dict[str, Any]:
        """Run all benchmarks."""
        print("Starting Benchmarking Suite\n")
        print("=" * 70)

        self.benchmark_by_category()
        self.benchmark_by_width()
        self.benchmark_by_depth()
        self.benchmark_memory_usage()

        print("\n" + "=" * 70)
        print("Benchmarking Complete")

        return self.results

    def save_results(self, path: Path = RESULTS_FILE):
        """Write collected results as JSON."""
        with open(path, "w") as f:
            json.dump(self.results, f, indent=2)
        print(f"Results saved to {path}")


def main():
    """Run benchmarks."""
    suite = BenchmarkSuite()
    suite.run_all_benchmarks()
    suite.save_results()


if __name__ == "__main__":
    main()
