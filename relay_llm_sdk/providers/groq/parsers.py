from __future__ import annotations

from typing import Any, List

from ...core.normalization.usage import extract_token_usage
from ...core.utils import get_str, is_structured, safe_get
from ...models.generation import ProviderType
from ...streaming.types import StreamSignal, UsageReported
from ..errors import ErrorMapper


def decode_x_groq(chunk: Any) -> List[StreamSignal]:
    """
    Read Groq's ``x_groq`` extension block.

    The final chunk reports usage there instead of in ``usage``; a stream
    that fails server-side reports ``x_groq.error``.

    Raises:
        ProviderAPIError: ``x_groq`` carries an error
    """
    if not is_structured(chunk):
        return []
    x_groq = safe_get(chunk, "x_groq")
    if x_groq is None:
        return []

    error = safe_get(x_groq, "error")
    if error is not None:
        payload = error if isinstance(error, dict) else {"error": {"message": get_str(x_groq, "error") or str(error)}}
        raise ErrorMapper.from_payload(payload, ProviderType.GROQ)

    usage = extract_token_usage(safe_get(x_groq, "usage"))
    if usage is None:
        return []
    return [UsageReported(usage=usage)]
