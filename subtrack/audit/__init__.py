"""Audit logging package."""

from subtrack.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
