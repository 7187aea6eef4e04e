#!/usr/bin/env python3
"""Performance benchmark script for mstime."""

import time
import sys
from pathlib import Path
from typing import Callable, Dict

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from mstime import Timestamp

BASE_MILLIS = 1640995200000


def benchmark_operation(operation: Callable[[int], object], iterations: int) -> Dict[str, float]:
    """Time one operation over a number of iterations."""
    # Warm up
    for i in range(min(iterations, 1000)):
        operation(i)

    start_time = time.perf_counter()

    for i in range(iterations):
        operation(i)

    total_time = time.perf_counter() - start_time

    return {
        "total_time": total_time,
        "avg_time_ns": total_time / iterations * 1e9,
        "ops_per_second": iterations / total_time,
        "iterations": iterations,
    }


def build_operations() -> Dict[str, Callable[[int], object]]:
    """Operations matching the hot paths of a market-data consumer."""
    ts = Timestamp(BASE_MILLIS)
    later = Timestamp(BASE_MILLIS + 1000)

    return {
        "creation": lambda i: Timestamp(BASE_MILLIS + i),
        "now": lambda i: Timestamp.now(),
        "start_of_day": lambda i: ts.start_of_day(),
        "comparison": lambda i: ts < later,
        "to_string": lambda i: ts.to_string(),
        "parse (first layout)": lambda i: Timestamp.parse("2022-01-01 15:30:45.123"),
        "parse (fallback)": lambda i: Timestamp.parse("Jan 02 2022 15:04:05"),
    }


def main():
    """Main benchmark function."""
    print("⚡ mstime Performance Benchmark")
    print("=" * 40)

    iterations = int(sys.argv[1]) if len(sys.argv) > 1 else 100_000

    for name, operation in build_operations().items():
        try:
            results = benchmark_operation(operation, iterations)

            print(f"\n📊 {name}:")
            print(f"   Total time: {results['total_time']:.3f}s")
            print(f"   Avg per op: {results['avg_time_ns']:.0f}ns")
            print(f"   Ops/second: {results['ops_per_second']:.0f}")

        except Exception as e:
            print(f"   ❌ Benchmark failed: {e}")


if __name__ == "__main__":
    main()
