"""
Orchestration Context

Responsibilities:
- Runs the structured-then-generic extraction state machine over captured documents
- Falls back to sequential alternate-endpoint probes when no document has a direct result
- Compacts success and error envelopes under the byte budget

Owns: Run outcome, failure surfacing
Never: Posts payloads or schedules runs
"""

from menumine.contexts.orchestration.orchestrator import (
    PipelineOutcome,
    PipelineState,
    run_pipeline,
)

__all__ = ["PipelineOutcome", "PipelineState", "run_pipeline"]
