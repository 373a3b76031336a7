"""LangGraph-based request orchestration."""

from roundtable_core.flows.runner import run_roundtable

__all__ = ["run_roundtable"]
