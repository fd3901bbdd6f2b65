import time
import logging
from typing import List, Tuple

from saral.config import SimplifierConfig
from saral.pipeline import SimplifierPipeline

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger("benchmark")

SAMPLES: List[Tuple[str, str]] = [
    (
        "news",
        "The Reserve Bank of India announced a comprehensive monetary policy "
        "framework approximately three weeks after the consultation period, "
        "because inflation had remained significantly above the 4% target. "
        "Commercial lenders will subsequently implement the revised guidelines "
        "for approximately 2500000 borrowers across numerous districts.",
    ),
    (
        "structured",
        '{"notice": {"title": "Municipal corporation will commence road repair '
        'work in the northern wards next Monday", "budget": "$15000", '
        '"wards": [4, 7, 9]}}',
    ),
    (
        "plain",
        "The school will open a new library next month. Children can borrow "
        "two books every week. The library will stay open until six in the evening.",
    ),
]


def run_benchmark(rounds: int = 50):
    logger.info("Initializing Saral pipeline benchmark...")
    pipeline = SimplifierPipeline(SimplifierConfig(seed=7))

    print("\n" + "=" * 64)
    print(" " * 22 + "BENCHMARK RESULTS")
    print("=" * 64)
    print(f"{'sample':<12}{'ms/run':>10}{'grade in':>12}{'grade out':>12}{'fallback':>12}")

    for name, text in SAMPLES:
        start_time = time.perf_counter()
        for _ in range(rounds):
            result = pipeline.run(text)
        elapsed_ms = (time.perf_counter() - start_time) * 1000 / rounds

        print(
            f"{name:<12}{elapsed_ms:>10.2f}{result.source_grade:>12.1f}"
            f"{result.output_grade:>12.1f}{str(result.fallback_used):>12}"
        )

    print("=" * 64)


if __name__ == "__main__":
    run_benchmark()
