"""Benchmarks comparing bailout boundaries with conventional error returns.

Run with: pytest benchmarks/bench_boundary.py --benchmark-only -v
"""

from bailout import Slot, catch, handle, must1

OOPS = ValueError('oops')


def failer() -> tuple[int, Exception | None]:
    return 0, OOPS


def succeeder() -> tuple[int, Exception | None]:
    return 42, None


def call(f) -> int:
    i, err = f()
    if err is not None:
        return -1
    return i


def via_catch(f) -> int:
    result = 0

    def work():
        nonlocal result
        result = must1(*f())

    if catch(work) is not None:
        return -1
    return result


def via_handle(f) -> int:
    out = Slot()
    with handle(out):
        return must1(*f())
    return -1


def via_handle_transform(f) -> int:
    result = 0

    def fallback(err):
        nonlocal result
        result = -1

    with handle(Slot(), fallback):
        result = must1(*f())
    return result


# =============================================================================
# Failure path
# =============================================================================


class TestFailure:
    """Benchmark the cost of a failing call."""

    def test_conventional(self, benchmark):
        assert benchmark(call, failer) == -1

    def test_catch(self, benchmark):
        assert benchmark(via_catch, failer) == -1

    def test_handle(self, benchmark):
        assert benchmark(via_handle, failer) == -1

    def test_handle_transform(self, benchmark):
        assert benchmark(via_handle_transform, failer) == -1


# =============================================================================
# Success path
# =============================================================================


class TestSuccess:
    """Benchmark the overhead on a successful call."""

    def test_conventional(self, benchmark):
        assert benchmark(call, succeeder) == 42

    def test_catch(self, benchmark):
        assert benchmark(via_catch, succeeder) == 42

    def test_handle(self, benchmark):
        assert benchmark(via_handle, succeeder) == 42

    def test_handle_transform(self, benchmark):
        assert benchmark(via_handle_transform, succeeder) == 42
