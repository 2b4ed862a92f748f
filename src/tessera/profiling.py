"""Tessera RenderAccumulator: opt-in profiling for compile and update.

Records, for the duration of a ``with`` block:
- Templates compiled and the parts they declare
- Instances created and the parts bound
- Part evaluations (patches that reached ``get_value``)
- Mutations applied, per part kind

Zero overhead when disabled (get_render_accumulator() returns None).

Example:
    from tessera import compile_markup
    from tessera.profiling import profiled_render

    template = compile_markup("<p>{x}</p>")
    with profiled_render() as metrics:
        instance = template.create_instance({"x": 1})
        instance.update({"x": 1})

    print(metrics.summary())
    # {"total_ms": 0.1, "templates_compiled": 0, "instances_created": 1,
    #  "parts_bound": 1, "evaluations": 1, "mutations": 1, ...}

"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tessera.parts import PartKind


@dataclass
class RenderAccumulator:
    """Accumulated metrics for compile, instantiate and update calls.

    Attributes:
        start_time: Profiling start timestamp.
        templates_compiled: Number of compile() calls recorded.
        parts_declared: Descriptors produced by those compiles.
        instances_created: Number of create_instance() calls recorded.
        parts_bound: Parts bound across those instances.
        evaluations: Part updates whose expression reported a change.
        mutations: Tree mutations applied, keyed by part kind value.

    """

    start_time: float = field(default_factory=perf_counter)
    templates_compiled: int = 0
    parts_declared: int = 0
    instances_created: int = 0
    parts_bound: int = 0
    evaluations: int = 0
    mutations: Counter[str] = field(default_factory=Counter)

    def record_compile(self, part_count: int) -> None:
        self.templates_compiled += 1
        self.parts_declared += part_count

    def record_instance(self, part_count: int) -> None:
        self.instances_created += 1
        self.parts_bound += part_count

    def record_evaluation(self) -> None:
        self.evaluations += 1

    def record_mutation(self, kind: PartKind) -> None:
        self.mutations[kind.value] += 1

    @property
    def mutation_count(self) -> int:
        return sum(self.mutations.values())

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of render metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "templates_compiled": self.templates_compiled,
            "parts_declared": self.parts_declared,
            "instances_created": self.instances_created,
            "parts_bound": self.parts_bound,
            "evaluations": self.evaluations,
            "mutations": self.mutation_count,
            "mutations_by_kind": dict(self.mutations),
        }


_accumulator: ContextVar[RenderAccumulator | None] = ContextVar(
    "render_accumulator",
    default=None,
)


def get_render_accumulator() -> RenderAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_render() -> Iterator[RenderAccumulator]:
    """Context manager for profiled compile/update work.

    Yields:
        RenderAccumulator populated by calls made inside the block.

    """
    acc = RenderAccumulator()
    token: Token[RenderAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)


__all__ = [
    "RenderAccumulator",
    "get_render_accumulator",
    "profiled_render",
]
