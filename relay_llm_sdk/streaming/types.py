from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..models.generation import Citation, TokenUsage


@dataclass
class MessageStarted:
    """The upstream announced the response (model may still be unknown)."""
    model: Optional[str] = None


@dataclass
class TextFragment:
    text: str


@dataclass
class ThinkingStarted:
    """A reasoning block opened before any of its text arrived."""


@dataclass
class ThinkingFragment:
    text: str


@dataclass
class BlockStopped:
    """A content block ended.

    Attributes:
        index: Block position; closes the tool call at that position, if any.
            None only closes an open thinking block.
    """
    index: Optional[int] = None


@dataclass
class ToolCallFragment:
    """A fragment that may open a tool call, name it, or carry arguments."""
    index: Optional[int]
    call_id: Optional[str] = None
    name: Optional[str] = None
    arguments: str = ""


@dataclass
class ToolArgumentsFragment:
    """Argument text for a call opened earlier at ``index``."""
    index: Optional[int]
    arguments: str


@dataclass
class ToolCallCompleted:
    index: int


@dataclass
class CitationsReported:
    citations: List[Citation] = field(default_factory=list)


@dataclass
class UsageReported:
    usage: TokenUsage


@dataclass
class FinishReported:
    """A native stop reason.

    Attributes:
        reason: Raw upstream value, mapped through the provider's table
        canonical: Already-canonical reason that bypasses the table
    """
    reason: Optional[str] = None
    canonical: Optional[str] = None


@dataclass
class Unrecognized:
    """An upstream event with no meaning for normalization."""
    kind: str


StreamSignal = Union[
    MessageStarted,
    TextFragment,
    ThinkingStarted,
    ThinkingFragment,
    BlockStopped,
    ToolCallFragment,
    ToolArgumentsFragment,
    ToolCallCompleted,
    CitationsReported,
    UsageReported,
    FinishReported,
    Unrecognized,
]
"""Typed result of decoding one upstream event."""
