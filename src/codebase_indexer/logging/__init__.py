"""Structured logging utilities."""

from .audit import AuditEvent, AuditSink, JsonlAuditLogger, sanitize_arguments, utc_timestamp

__all__ = ["AuditEvent", "AuditSink", "JsonlAuditLogger", "sanitize_arguments", "utc_timestamp"]
