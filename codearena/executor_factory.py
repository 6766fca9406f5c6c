"""Factory for creating submission clients based on configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from codearena.executor_base import SubmissionClient
from codearena.executor_judge0 import Judge0Client

if TYPE_CHECKING:
    from codearena.config import Config


def create_client(config: Config) -> SubmissionClient:
    """Create the Judge0 client for config.judge0_url."""
    return Judge0Client(config)
