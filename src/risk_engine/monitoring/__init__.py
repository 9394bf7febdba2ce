"""Monitoring exports."""

from risk_engine.monitoring.audit import AuditLog

__all__ = ["AuditLog"]
