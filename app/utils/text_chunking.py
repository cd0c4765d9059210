"""
Text chunking utilities for splitting long texts before sending them to spell-check backends.

The remote checkers reject or truncate long submissions, so text is split at
paragraph (blank-line) boundaries and, where a paragraph is still too long,
at sentence-ending punctuation.
"""
import re
from typing import List

from app.utils.logger import get_logger

logger = get_logger("utils.text_chunking")

DEFAULT_MAX_CHARS = 900

# Blank line: newline, optional horizontal whitespace, newline
PARAGRAPH_BREAK_PATTERN = re.compile(r"\n\s*\n")

# Zero-width split point after Korean/Latin sentence terminators that are followed by whitespace
SENTENCE_END_PATTERN = re.compile(r"(?<=[.!?？！。．])(?=\s)")


def split_into_paragraphs(text: str) -> List[str]:
    """
    Split text at blank lines.

    Args:
        text: Input text

    Returns:
        Trimmed, non-empty paragraphs in original order
    """
    return [p.strip() for p in PARAGRAPH_BREAK_PATTERN.split(text) if p.strip()]


def split_into_sentences(paragraph: str) -> List[str]:
    """
    Split a paragraph after sentence-ending punctuation.

    Runs of terminators ("?!", "...") stay attached to their sentence.
    Each piece keeps the whitespace that preceded it so that joining the
    pieces gives back the paragraph exactly.

    Args:
        paragraph: Text to split

    Returns:
        List of sentence pieces (may be a single piece)
    """
    return [piece for piece in SENTENCE_END_PATTERN.split(paragraph) if piece]


def _pack_sentences(sentences: List[str], max_chars: int) -> List[str]:
    """Accumulate sentences into chunks of at most max_chars characters."""
    chunks = []
    buffer = ""

    for sentence in sentences:
        if buffer.strip() and len(buffer) + len(sentence) > max_chars:
            chunks.append(buffer.strip())
            buffer = sentence.lstrip()
        else:
            buffer += sentence

    if buffer.strip():
        chunks.append(buffer.strip())

    return chunks


def split_into_chunks(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> List[str]:
    """
    Split text into chunks that don't exceed max_chars.

    Strategy:
    1. Text within budget is returned as a single trimmed chunk
    2. Otherwise split at blank lines; each paragraph within budget is a chunk
    3. Oversized paragraphs are split at sentence boundaries and sentences are
       packed into chunks without exceeding the budget

    A single sentence longer than max_chars cannot be split and is returned
    as its own (oversized) chunk.

    Args:
        text: Input text to chunk
        max_chars: Maximum characters per chunk (default: 900)

    Returns:
        List of text chunks in original order
    """
    trimmed = text.strip()

    if len(trimmed) <= max_chars:
        return [trimmed]

    chunks: List[str] = []
    for paragraph in split_into_paragraphs(trimmed):
        if len(paragraph) <= max_chars:
            chunks.append(paragraph)
            continue
        chunks.extend(_pack_sentences(split_into_sentences(paragraph), max_chars))

    oversized = sum(1 for c in chunks if len(c) > max_chars)
    if oversized:
        logger.warning(
            "Chunks exceed budget, no sentence boundary to split at",
            oversized_chunks=oversized,
            max_chars=max_chars,
        )

    logger.info(
        "Text chunked",
        original_chars=len(trimmed),
        chunk_count=len(chunks),
        max_chars=max_chars,
    )

    return chunks
