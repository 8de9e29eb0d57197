"""
Tests for the pass pipeline engine.
"""

from nibrs.core.context import MappingContext, MappingRequest
from nibrs.core.engine import Engine, Pipeline
from nibrs.ir.enums import MappingStatus
from nibrs.ir.schema import DescriptiveExtract, NibrsSegments, Offense


def _request() -> MappingRequest:
    return MappingRequest(extract=DescriptiveExtract(narrative="test"), request_id="req-1")


def p10_record(ctx: MappingContext) -> MappingContext:
    ctx.segments = NibrsSegments(offenses=[Offense(code="13B")])
    ctx.add_trace(pass_name="p10_record", action="built")
    return ctx


def p10_reject(ctx: MappingContext) -> MappingContext:
    ctx.fail("Nothing reportable", source="p10_reject")
    return ctx


def p10_boom(ctx: MappingContext) -> MappingContext:
    raise RuntimeError("kaput")


def p20_never(ctx: MappingContext) -> MappingContext:
    raise AssertionError("pipeline should have halted")


def _run(*passes):
    engine = Engine()
    engine.register_pipeline(Pipeline(id="default", name="Test", passes=list(passes)))
    return engine.run(_request())


class TestEngine:
    def test_success(self):
        outcome = _run(p10_record)
        assert outcome.ok
        assert outcome.segments.offense_codes == ["13B"]
        assert outcome.request_id == "req-1"
        assert [t.action for t in outcome.trace] == ["built"]

    def test_failed_pass_halts_pipeline(self):
        outcome = _run(p10_reject, p20_never)
        assert outcome.status == MappingStatus.FAILED
        assert outcome.failure.message == "Nothing reportable"
        assert outcome.trace[-1].action == "pipeline_halted"
        assert outcome.trace[-1].pass_name == "p10_reject"

    def test_raising_pass(self):
        outcome = _run(p10_boom, p20_never)
        assert outcome.status == MappingStatus.ERROR
        assert outcome.failure.message == "Pass 'p10_boom' failed: kaput"
        assert [d.code for d in outcome.diagnostics] == ["PASS_ERROR"]

    def test_no_record_produced(self):
        outcome = _run()
        assert outcome.status == MappingStatus.ERROR
        assert outcome.failure.message == "Mapping produced no record"

    def test_unknown_pipeline(self):
        outcome = Engine().run(_request(), "nope")
        assert not outcome.ok
        assert outcome.diagnostics[0].code == "PIPELINE_NOT_FOUND"
        assert outcome.failure.message == "Pipeline 'nope' not registered"

    def test_pass_names(self):
        pipeline = Pipeline(id="x", name="X", passes=[p10_record, p10_reject])
        assert pipeline.pass_names == ["p10_record", "p10_reject"]
