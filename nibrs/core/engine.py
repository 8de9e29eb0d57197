"""
Engine — Runs mapping pipelines.

A pipeline is an ordered list of passes over a MappingContext. The engine
stops at the first pass that leaves the context in a non-SUCCESS status
(a rejected extract or a pass that raised) and turns the context into a
MappingOutcome. Mapping rules live in the passes, not here.
"""

from dataclasses import dataclass
from typing import Optional

from nibrs.core.context import MappingContext, MappingRequest
from nibrs.core.contracts import Pass
from nibrs.core.logging import MappingLogger
from nibrs.ir.enums import DiagnosticLevel, MappingStatus
from nibrs.ir.schema import MappingOutcome

DEFAULT_PIPELINE_ID = "default"


@dataclass
class Pipeline:
    """A named sequence of passes."""

    id: str
    name: str
    passes: list[Pass]

    @property
    def pass_names(self) -> list[str]:
        return [p.__name__ for p in self.passes]


class Engine:
    """Registry of pipelines; runs one per mapping request."""

    def __init__(self) -> None:
        self._pipelines: dict[str, Pipeline] = {}

    def register_pipeline(self, pipeline: Pipeline) -> None:
        self._pipelines[pipeline.id] = pipeline

    def has_pipeline(self, pipeline_id: str) -> bool:
        return pipeline_id in self._pipelines

    def run(self, request: MappingRequest, pipeline_id: Optional[str] = None) -> MappingOutcome:
        """
        Map one extract.

        Args:
            request: The extract and its correlation ID
            pipeline_id: Registered pipeline to run (default: "default")

        Returns:
            MappingOutcome carrying segments or a failure, plus the
            diagnostics and trace of every pass that ran
        """
        ctx = MappingContext.from_request(request)
        pipeline = self._pipelines.get(pipeline_id or DEFAULT_PIPELINE_ID)
        if pipeline is None:
            ctx.status = MappingStatus.ERROR
            ctx.add_diagnostic(
                level=DiagnosticLevel.ERROR,
                code="PIPELINE_NOT_FOUND",
                message=f"Pipeline '{pipeline_id or DEFAULT_PIPELINE_ID}' not registered",
                source="engine",
            )
            return ctx.to_outcome()

        mlog = MappingLogger(request.request_id)
        for pass_fn in pipeline.passes:
            ctx = self._run_pass(pass_fn, ctx, mlog)
            if ctx.status != MappingStatus.SUCCESS:
                ctx.add_trace(pass_name=pass_fn.__name__, action="pipeline_halted")
                break

        mlog.mapping_complete(
            status=ctx.status.value,
            offenses=len(ctx.offenses),
            rejected=len(ctx.rejected_offenses),
            victims=len(ctx.victims),
            properties=len(ctx.properties),
            arrestees=len(ctx.arrestees),
        )
        return ctx.to_outcome()

    @staticmethod
    def _run_pass(pass_fn: Pass, ctx: MappingContext, mlog: MappingLogger) -> MappingContext:
        # A pass that raises fails the mapping; the outcome carries the error
        pass_name = pass_fn.__name__
        mlog.pass_start(pass_name)
        try:
            ctx = pass_fn(ctx)
        except Exception as e:
            mlog.pass_error(pass_name, e)
            ctx.status = MappingStatus.ERROR
            ctx.add_diagnostic(
                level=DiagnosticLevel.ERROR,
                code="PASS_ERROR",
                message=f"Pass '{pass_name}' failed: {e}",
                source="engine",
            )
            return ctx
        mlog.pass_end(pass_name)
        return ctx


_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Process-wide engine, created on first use."""
    global _engine
    if _engine is None:
        _engine = Engine()
    return _engine
