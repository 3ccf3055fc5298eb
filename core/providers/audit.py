"""LLM audit logging. Tracks every generation call for cost monitoring and debugging.

Audit records are kept in-memory for the lifetime of the owning session,
with an optional hook for persisting them elsewhere.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .base import LLMResponse

logger = logging.getLogger(__name__)


@dataclass
class AuditRecord:
    """Single LLM call audit entry."""

    subject: str = ""
    provider: str = ""
    model: str = ""
    prompt_hash: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0
    temperature: float = 0.5
    result_hash: str = ""
    timestamp: float = field(default_factory=time.time)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject": self.subject,
            "provider": self.provider,
            "model": self.model,
            "prompt_hash": self.prompt_hash,
            "token_usage": {
                "input": self.input_tokens,
                "output": self.output_tokens,
            },
            "latency_ms": self.latency_ms,
            "temperature": self.temperature,
            "result_hash": self.result_hash,
            "timestamp": self.timestamp,
            "error": self.error,
        }


class AuditLogger:
    """Collects LLM audit records.

    Usage::

        audit = AuditLogger()
        # ... after a successful call ...
        audit.log(response, subject="Ada Lovelace", temperature=0.5)
        # ... or after a failed one ...
        audit.log_failure(error, subject="Ada Lovelace", model="gemini-2.5-flash")

        print(audit.summary())
    """

    def __init__(self, persist_fn: Optional[Callable[[AuditRecord], None]] = None):
        """
        Parameters
        ----------
        persist_fn : callable, optional
            Function to persist an audit record.
            If None, records are stored in-memory only.
        """
        self._records: List[AuditRecord] = []
        self._persist_fn = persist_fn

    def log(
        self,
        response: LLMResponse,
        *,
        subject: str = "",
        temperature: float = 0.5,
        error: Optional[str] = None,
    ) -> AuditRecord:
        """Record a completed LLM call."""
        record = AuditRecord(
            subject=subject,
            provider=response.provider,
            model=response.model,
            prompt_hash=response.prompt_hash,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            latency_ms=response.latency_ms,
            temperature=temperature,
            result_hash=response.result_hash,
            error=error,
        )
        return self._append(record)

    def log_failure(
        self,
        error: Exception,
        *,
        subject: str = "",
        provider: str = "",
        model: str = "",
        temperature: float = 0.5,
    ) -> AuditRecord:
        """Record a call that ended in an exception before a response existed."""
        record = AuditRecord(
            subject=subject,
            provider=provider,
            model=model,
            temperature=temperature,
            error=f"{type(error).__name__}: {error}",
        )
        return self._append(record)

    def _append(self, record: AuditRecord) -> AuditRecord:
        self._records.append(record)

        if self._persist_fn:
            try:
                self._persist_fn(record)
            except Exception as e:
                logger.error("Failed to persist audit record: %s", e)

        logger.info(
            "LLM audit: provider=%s model=%s tokens=%d+%d latency=%dms error=%s",
            record.provider,
            record.model,
            record.input_tokens,
            record.output_tokens,
            record.latency_ms,
            record.error or "-",
        )
        return record

    def summary(self) -> Dict[str, Any]:
        """Return aggregate stats for all recorded calls."""
        errors_by_kind: Dict[str, int] = {}
        for r in self._records:
            if r.error:
                kind = r.error.split(":", 1)[0]
                errors_by_kind[kind] = errors_by_kind.get(kind, 0) + 1

        return {
            "total_calls": len(self._records),
            "total_input_tokens": sum(r.input_tokens for r in self._records),
            "total_output_tokens": sum(r.output_tokens for r in self._records),
            "total_latency_ms": sum(r.latency_ms for r in self._records),
            "errors": sum(errors_by_kind.values()),
            "errors_by_kind": errors_by_kind,
        }

    @property
    def records(self) -> List[AuditRecord]:
        return list(self._records)
