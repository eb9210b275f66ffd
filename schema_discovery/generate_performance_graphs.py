#!/usr/bin/env python3
"""
Generate performance graphs for schema discovery from saved benchmark results.

Reads the JSON written by src/benchmarking/benchmark.py and draws one panel
per benchmark: time by corpus category, scaling with array width, scaling
with nesting depth, and memory growth.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np


RESULTS_FILE = Path(__file__).parent / "src" / "benchmarking" / "benchmark_results.json"
OUTPUT_FILE = Path(__file__).parent / "performance_graphs.png"

BAR_COLORS = ['#4ECDC4', '#45B7D1', '#2ECC71', '#F39C12', '#E74C3C']


def _plot_scaling(ax, rows, x_key: str, x_label: str, title: str, color: str):
    """Plot time against x_key with a least-squares linear fit."""
    if not rows:
        ax.set_title(f'{title}\n(no data)', fontsize=11, fontweight='bold')
        return

    x = np.array([row[x_key] for row in rows], dtype=float)
    y = np.array([row["ms"] for row in rows], dtype=float)

    ax.plot(x, y, 'o-', color=color, linewidth=2, label='measured')
    if len(x) >= 2:
        slope, intercept = np.polyfit(x, y, 1)
        ax.plot(x, slope * x + intercept, '--', color='black', alpha=0.6,
                label=f'fit: {slope * 1000:.3f}µs per unit')

    ax.set_xlabel(x_label, fontsize=10, fontweight='bold')
    ax.set_ylabel('Time (ms)', fontsize=10, fontweight='bold')
    ax.set_title(title, fontsize=11, fontweight='bold')
    ax.legend(fontsize=9, loc='upper left')
    ax.grid(alpha=0.3)


def _plot_bars(ax, values: Dict[str, float], y_label: str, title: str, unit: str):
    """Plot one labelled bar per entry."""
    if not values:
        ax.set_title(f'{title}\n(no data)', fontsize=11, fontweight='bold')
        return

    names = list(values.keys())
    heights = list(values.values())
    colors = [BAR_COLORS[i % len(BAR_COLORS)] for i in range(len(names))]

    bars = ax.bar(names, heights, color=colors, edgecolor='black', linewidth=1)
    ax.set_ylabel(y_label, fontsize=10, fontweight='bold')
    ax.set_title(title, fontsize=11, fontweight='bold')
    ax.grid(axis='y', alpha=0.3)
    plt.setp(ax.xaxis.get_majorticklabels(), rotation=15, ha='right', fontsize=8)

    for bar, val in zip(bars, heights):
        ax.text(bar.get_x() + bar.get_width() / 2., bar.get_height(),
                f'{val:.2f}{unit}', ha='center', va='bottom', fontsize=8, fontweight='bold')


def plot_results(results: Dict[str, Any], output_file: Path = OUTPUT_FILE) -> Path:
    """Draw all panels for a results dict and save them as a PNG."""
    fig = plt.figure(figsize=(14, 10))
    fig.suptitle('jdisc Schema Discovery: Performance Analysis', fontsize=16, fontweight='bold')

    category_times = {
        category: stats["avg_ms"] for category, stats in results.get("by_category", {}).items()
    }
    _plot_bars(plt.subplot(2, 2, 1), category_times, 'Time (ms)',
               'Average Time by Corpus Category', 'ms')
    _plot_scaling(plt.subplot(2, 2, 2), results.get("by_width", []), "width",
                  'Array elements', 'Scaling with Array Width', '#45B7D1')
    _plot_scaling(plt.subplot(2, 2, 3), results.get("by_depth", []), "depth",
                  'Nesting depth', 'Scaling with Nesting Depth', '#2ECC71')
    _plot_bars(plt.subplot(2, 2, 4), results.get("memory_mb", {}), 'Memory (MB)',
               'Resident Memory Growth', 'MB')

    plt.tight_layout()
    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return Path(output_file)


def main():
    results_file = Path(sys.argv[1]) if len(sys.argv) > 1 else RESULTS_FILE
    if not results_file.exists():
        print(f"Error: {results_file} not found. Run src/benchmarking/benchmark.py first.")
        sys.exit(1)

    with open(results_file) as f:
        results = json.load(f)

    output = plot_results(results)
    print(f"✓ Performance graphs saved to: {output}")


if __name__ == "__main__":
    main()
