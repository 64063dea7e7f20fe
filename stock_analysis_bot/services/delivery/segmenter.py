"""
Split long replies into ordered, WhatsApp-sized parts.

Breaks prefer the boundaries the analysis text is written with (stock
separators, blank lines, bullets, sentences) and fall back to a hard cut when
no boundary sits close enough to the limit.
"""

from dataclasses import dataclass, field
from typing import List

from ...core.exceptions import InvalidArgumentError

# Most preferred first.
BREAK_MARKERS = (
    "\n\n---\n\n",  # between stock write-ups
    "\n\n",  # between sections
    "\n*",  # before a bullet
    "\n",
    ". ",
    ", ",
    " ",
)

# A break must leave the chunk at least this full.
MIN_FILL_RATIO = 0.7


def _find_split(text: str, limit: int) -> int:
    """Index just past the best break point in ``text[:limit]``, else ``limit``."""
    threshold = limit * MIN_FILL_RATIO
    for marker in BREAK_MARKERS:
        # the whole marker must lie inside the window
        pos = text.rfind(marker, 0, limit)
        if pos != -1 and pos >= threshold:
            return pos + len(marker)
    return limit


def split_text(body: str, max_chunk_size: int) -> List[str]:
    """Split ``body`` into unlabelled chunks of at most ``max_chunk_size`` characters."""
    if max_chunk_size <= 0:
        raise InvalidArgumentError(
            f"max_chunk_size must be positive, got {max_chunk_size}"
        )
    if not body:
        return []
    if len(body) <= max_chunk_size:
        return [body]

    chunks: List[str] = []
    remaining = body
    while len(remaining) > max_chunk_size:
        split_at = _find_split(remaining, max_chunk_size)
        chunk = remaining[:split_at].strip()
        if chunk:
            chunks.append(chunk)
        remaining = remaining[split_at:].lstrip()

    if remaining:
        chunks.append(remaining)
    return chunks


def label_parts(chunks: List[str]) -> List[str]:
    """Prefix each chunk with ``(i/n) `` when there is more than one."""
    total = len(chunks)
    if total <= 1:
        return list(chunks)
    return [f"({i}/{total}) {chunk}" for i, chunk in enumerate(chunks, start=1)]


def segment(body: str, max_chunk_size: int) -> List[str]:
    """Split ``body`` into ordered WhatsApp parts.

    Args:
        body: The full reply text.
        max_chunk_size: Ceiling for each part's content in characters. The
            ``(i/n)`` label is added on top, so callers leave headroom below
            the transport's hard limit.

    Returns:
        ``[]`` for an empty body, ``[body]`` when it already fits, otherwise
        the labelled parts in reading order.

    Raises:
        InvalidArgumentError: If ``max_chunk_size`` is not positive.
    """
    return label_parts(split_text(body, max_chunk_size))


@dataclass
class OutboundMessage:
    """A reply about to be delivered; never persisted."""

    body: str
    max_chunk_size: int
    parts: List[str] = field(init=False)

    def __post_init__(self) -> None:
        self.parts = segment(self.body, self.max_chunk_size)
