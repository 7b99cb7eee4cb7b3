import argparse
import traceback

from benchmarks.tables import LookupBenchmark, TableBuildBenchmark

# Registry of available benchmarks
BENCHMARKS = {
    "build": TableBuildBenchmark,
    "lookup": LookupBenchmark,
}


def main():
    parser = argparse.ArgumentParser(description="gridgraph Benchmark Harness")
    parser.add_argument(
        "benchmark",
        nargs="?",
        choices=list(BENCHMARKS.keys()) + ["all"],
        default="all",
        help="Benchmark to run (default: all)"
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Enable Taichi kernel profiler"
    )
    parser.add_argument(
        "--repeat",
        type=int,
        default=10,
        help="Timed calls per measurement (default: 10)"
    )

    args = parser.parse_args()

    if args.benchmark == "all":
        to_run = list(BENCHMARKS.values())
    else:
        to_run = [BENCHMARKS[args.benchmark]]

    for bench_cls in to_run:
        print(f"\nRunning {bench_cls.__name__}...")
        try:
            # Taichi init is global; re-initializing resets previously allocated fields
            bench = bench_cls(profile=args.profile, repeat=args.repeat)
            bench.run()
        except Exception as e:
            print(f"Error running benchmark: {e}")
            traceback.print_exc()


if __name__ == "__main__":
    main()
