"""String helpers shared by handlers and the media layer."""

import hashlib
import re
from pathlib import Path

MAX_SEGMENT_LENGTH = 150
DIGEST_LENGTH = 10


def capitalize_words(value: str) -> str:
    """Upper-case the first letter of every space separated word.

    The rest of each word is left as typed, so ``"sea VIEW"`` becomes
    ``"Sea VIEW"`` rather than ``"Sea View"``.

    Example:
        >>> capitalize_words("luxury villa")
        'Luxury Villa'
    """
    return " ".join(word[:1].upper() + word[1:] for word in value.split(" "))


def key_digest(value: str) -> str:
    """Short stable digest of a natural key."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:DIGEST_LENGTH]


def safe_segment(value: str) -> str:
    """Turn a natural key into a single safe path segment.

    Directory separators, parent references and null bytes are removed,
    anything that is not a letter, digit, ``.``, ``-`` or ``_`` becomes
    an underscore and the result never starts with a dot. Letters of
    any script are kept.

    Keys that come through unchanged are used as-is. Any other key gets
    ``~`` and a digest of the raw key appended. ``~`` never survives
    sanitizing, so two different keys never share a segment.

    Example:
        >>> safe_segment("Marina-Heights_2")
        'Marina-Heights_2'
        >>> safe_segment("Villa 1").startswith("Villa_1~")
        True
    """
    raw = value or ""

    segment = Path(raw.replace("\\", "/")).name
    segment = segment.replace("\x00", "")
    segment = re.sub(r"[^\w.-]", "_", segment.strip())
    segment = re.sub(r"\.{2,}", ".", segment)
    if segment.startswith("."):
        segment = "_" + segment[1:]

    segment = segment[:MAX_SEGMENT_LENGTH]
    if not segment.strip("._"):
        segment = "unnamed"

    if segment != raw:
        segment = f"{segment}~{key_digest(raw)}"
    return segment
