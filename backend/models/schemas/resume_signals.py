"""Numeric proof found in resume and portfolio text."""

from pydantic import BaseModel


class ResumeSignals(BaseModel):
    proof_count: int = 0  # numbers backed by achievement language
    proof_count_raw: int = 0  # every numeric match
    resume_signal_score: float = 0.35
    proof_notes: list[str] = []  # at most 5 diagnostics about rejected numbers
