"""
Performance benchmarks for GS1 decoder.
"""

import time
import statistics
from typing import Tuple

from gs1_decoder import decode


def benchmark(func, iterations: int = 1000) -> Tuple[float, float, float]:
    """
    Run a benchmark and return timing statistics.

    Returns:
        (mean_ms, min_ms, max_ms)
    """
    times = []

    for _ in range(iterations):
        start = time.perf_counter()
        func()
        elapsed = time.perf_counter() - start
        times.append(elapsed * 1000)  # Convert to ms

    return (
        statistics.mean(times),
        min(times),
        max(times)
    )


def run_benchmarks():
    """Run all benchmarks and print results."""
    print("=" * 60)
    print("GS1 Decoder Benchmarks")
    print("=" * 60)
    print()

    bracketed_cases = [
        ("GTIN only", "(01)00312345678906"),
        ("GTIN + Expiry", "(01)00312345678906(17)251231"),
        ("Full record", "(01)00312345678906(17)251231(10)LOT42(21)SN99"),
    ]

    positional_cases = [
        ("GTIN only", "0100312345678906"),
        ("GTIN + Serial", "0100312345678906211234"),
        ("Full record", "01003123456789061725123110LOT4221SN99"),
        ("Long serial", "0100312345678906" + "21" + "X" * 200),
        ("Noise", "Z" * 200),
    ]

    for title, cases in (("Bracketed", bracketed_cases), ("Positional", positional_cases)):
        print(f"{title} decoding:")
        print("-" * 60)
        for name, input_str in cases:
            mean, min_t, max_t = benchmark(
                lambda s=input_str: decode(s),
                iterations=1000
            )
            print(f"  {name:30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")
        print()

    print("Throughput test (10000 iterations):")
    print("-" * 60)

    complex_input = "01003123456789061725123110LOT4221SN99"

    start = time.perf_counter()
    for _ in range(10000):
        decode(complex_input)
    total = time.perf_counter() - start

    print(f"  Throughput: {10000 / total:.0f} decodes/second")
    print(f"  Total time: {total:.3f}s for 10000 decodes")

    print()
    print("=" * 60)


if __name__ == "__main__":
    run_benchmarks()
