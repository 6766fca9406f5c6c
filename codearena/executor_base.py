"""Abstract submission interface for the judging service."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from codearena.models import RawExecutionResponse


class TransportError(Exception):
    """A submission could not be completed by the judging service."""


@runtime_checkable
class SubmissionClient(Protocol):
    async def submit(
        self,
        language: str,
        source_code: str,
        stdin: str = "",
    ) -> RawExecutionResponse: ...
