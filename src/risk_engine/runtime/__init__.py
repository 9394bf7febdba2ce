"""Runtime context exports."""

from risk_engine.runtime.context import RunContext, create_run_context, projection_key

__all__ = ["RunContext", "create_run_context", "projection_key"]
