"""
MENUMINE - Schema-free menu mining and payload compaction

Finds the next dated meal in third-party JSON of unknown shape and squeezes
the result into a size-constrained webhook payload.

Architecture:
- Intake Context: Candidate document scoring and fallback probe fetching
- Extraction Context: Date detection, group filtering, item extraction, aggregation
- Compaction Context: Envelope building under a byte budget
- Orchestration Context: Structured-then-generic extraction pipeline
"""

__version__ = "0.1.0"
