"""
Example usage of pycowatch.

Run with: python examples/basic_usage.py
"""

import logging
import time

from pycowatch import RecordingSink, Stopwatch, timed

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


# Example 1: Time a block and print the runtime
with Stopwatch("Example #1", threshold_ms=10) as watch:
    for i in range(5):
        time.sleep(0.005)
        print(f"Example #1 runtime so far {watch.elapsed_ms()} milliseconds")
    watch.stop(report=True)


# Example 2: Silent unless the block needs more than 20 ms
with Stopwatch("Example #2", threshold_ms=20):
    sum(range(100_000))
print("(example #2 silently done, maybe)")


# Example 3: Decorated function, slow-code warnings collected in memory
slow_calls = RecordingSink()


@timed(threshold_ms=1, report=True, diagnostic_sink=slow_calls)
def build_table(size: int) -> list[int]:
    return [n * n for n in range(size)]


build_table(1_000_000)
for message in slow_calls.warnings:
    print(f"collected: {message}")
