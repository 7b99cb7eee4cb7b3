"""Table construction and device lookup timings."""

from dataclasses import dataclass

import taichi as ti

from benchmarks.harness import Benchmark
from gridgraph.core.dtypes import INDEX_DTYPE
from gridgraph.fields import NeighborhoodFields
from gridgraph.kernels import fill_border_types, gather_table
from gridgraph.tables import build_neighborhood_tables, project_tables, shape_strides

WIDTH = 72


@dataclass
class BuildMetrics:
    ndim: int
    neighborhood: str
    n_codes: int
    n_slots: int
    build_s: float
    project_s: float


def _rule(title: str = "") -> None:
    if title:
        print("\n" + "=" * WIDTH)
        print(f"{title:^{WIDTH}}")
    print("=" * WIDTH)


class TableBuildBenchmark(Benchmark):
    """Host-side table construction across dimension counts."""

    title = "TABLE BUILD"

    def run(self) -> list[BuildMetrics]:
        results = []
        for neighborhood in ("direct", "indirect"):
            for ndim in range(1, 6):
                tables = build_neighborhood_tables(ndim, neighborhood)
                strides = shape_strides((64,) * ndim)
                results.append(
                    BuildMetrics(
                        ndim, neighborhood, tables.n_border_types, tables.count,
                        self.timed(lambda: build_neighborhood_tables(ndim, neighborhood)),
                        self.timed(lambda: project_tables(tables, strides)),
                    )
                )

        _rule(f"{self.title} (mean of {self.repeat})")
        print(f"{'kind':<10}{'ndim':>6}{'codes':>8}{'slots':>8}{'build [ms]':>14}{'project [ms]':>14}")
        for m in results:
            print(
                f"{m.neighborhood:<10}{m.ndim:>6}{m.n_codes:>8}{m.n_slots:>8}"
                f"{m.build_s * 1e3:>14.2f}{m.project_s * 1e3:>14.2f}"
            )
        _rule()
        self.teardown()
        return results


class LookupBenchmark(Benchmark):
    """Per-cell border classification and degree gather on the device."""

    title = "DEVICE LOOKUP"
    uses_device = True

    def run(self) -> dict[int, float]:
        _rule(f"{self.title} ({self.backend}, mean of {self.repeat})")
        fields = NeighborhoodFields.from_tables(build_neighborhood_tables(2, "indirect"))
        results = {}
        for n in (512, 2048, 4096):
            border = ti.field(dtype=INDEX_DTYPE, shape=(n, n))
            degree = ti.field(dtype=INDEX_DTYPE, shape=(n, n))

            def lookup():
                fill_border_types(border)
                gather_table(border, fields.degree, degree)

            elapsed = self.timed(lookup)
            results[n] = n * n / elapsed / 1e6
            print(f"{n}x{n}: {elapsed * 1e3:.2f} ms/pass ({results[n]:.1f} Mcells/s)")

        _rule()
        self.teardown()
        return results
