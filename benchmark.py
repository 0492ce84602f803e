import argparse
from pathlib import Path
from random import randrange
from tempfile import TemporaryDirectory
from timeit import timeit

from jsondb import CloneLevel, JsonDB

benchmark_fns = []


def benchmark(fn):
    benchmark_fns.append(fn)
    return fn


@benchmark
def sequential_set_and_get(store: JsonDB, iterations: int):
    """Repeatedly sets and gets a sequence of documents.

    Tests read-after-write performance.
    """
    numbers = iter(range(iterations))

    def workload():
        i = next(numbers)
        store.set(f"key_{i}", {"value": i})
        store.get(f"key_{i}")

    return timeit(workload, number=iterations)


@benchmark
def random_gets(store: JsonDB, iterations: int):
    """Repeatedly gets random keys.

    The store is pre-filled with one document per key before we do random gets.
    """
    for i in range(iterations):
        store.set(f"key_{i}", {"value": i})

    def workload():
        i = randrange(iterations)
        store.get(f"key_{i}")

    return timeit(workload, number=iterations)


@benchmark
def nested_sets(store: JsonDB, iterations: int):
    """Writes a growing number of fields into one document.

    Every write re-reads and re-serializes the whole document.
    """
    numbers = iter(range(iterations))

    def workload():
        i = next(numbers)
        store.set("nested", i, f"fields.field_{i}")

    return timeit(workload, number=iterations)


@benchmark
def pushes(store: JsonDB, iterations: int):
    """Appends to a single array document."""
    store.set("list", [])
    numbers = iter(range(iterations))

    def workload():
        store.push("list", next(numbers))

    return timeit(workload, number=iterations)


@benchmark
def counter_increments(store: JsonDB, iterations: int):
    """Increments a nested counter in place."""
    store.set("counter", 0, "hits")

    def workload():
        store.math("counter", "+", 1, "hits")

    return timeit(workload, number=iterations)


def run(iterations: int, clone_level: str = CloneLevel.DEEP.value, observe: bool = False):
    line = "=============================="
    print(line)
    for benchmark_fn in benchmark_fns:
        print(f"Running: {benchmark_fn.__name__}")
        print(benchmark_fn.__doc__)
        with TemporaryDirectory() as tmpdir:
            store = JsonDB(path=Path(tmpdir), clone_level=clone_level, observe=observe)
            time_taken = benchmark_fn(store, iterations)
        print(f"Completed in {time_taken:.4f} seconds")
        print(line)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run benchmarks against jsondb.")
    parser.add_argument(
        "--iterations",
        dest="iterations",
        type=int,
        default=1000,
        help="Number of iterations to run for the benchmarks",
    )
    parser.add_argument(
        "--clone-level",
        dest="clone_level",
        type=str,
        choices=[level.value for level in CloneLevel],
        default=CloneLevel.DEEP.value,
        help="Clone level the store is constructed with",
    )
    parser.add_argument(
        "--observe",
        dest="observe",
        action="store_true",
        help="Return observed documents from reads",
    )
    args = parser.parse_args()
    run(args.iterations, args.clone_level, args.observe)
