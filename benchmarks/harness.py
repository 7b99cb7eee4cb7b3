"""
Timing scaffold shared by the table benchmarks.
"""
import abc
import time
from typing import Any, Callable

import taichi as ti

from gridgraph.config import init_taichi


class Benchmark(abc.ABC):
    """A named benchmark. Device benchmarks initialize Taichi on creation."""

    title: str = ""
    uses_device: bool = False

    def __init__(self, profile: bool = False, repeat: int = 10):
        self.profile = profile
        self.repeat = repeat
        self.backend = None
        if self.uses_device:
            self.backend = init_taichi(debug=False, kernel_profiler=profile)

    def timed(self, fn: Callable[[], Any]) -> float:
        """Mean seconds per call of fn, after one untimed warmup call."""
        fn()
        self._sync()
        start = time.perf_counter()
        for _ in range(self.repeat):
            fn()
        self._sync()
        return (time.perf_counter() - start) / self.repeat

    def _sync(self) -> None:
        if self.uses_device:
            ti.sync()

    @abc.abstractmethod
    def run(self) -> Any:
        """Run the benchmark and return its metrics."""

    def teardown(self) -> None:
        if self.uses_device and self.profile:
            ti.profiler.print_kernel_profiler_info()
            ti.profiler.clear_kernel_profiler_info()
