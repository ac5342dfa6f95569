"""Relay host extraction from Received headers."""

import re
from typing import Optional, Sequence

# CRLF (or bare LF) followed by whitespace starts a continuation line
_FOLD = re.compile(r"\r?\n[ \t]+")


def unfold(value: str) -> str:
    """Join a folded header value into a single line."""
    return _FOLD.sub(" ", value).replace("\r\n", " ").replace("\n", " ")


def extract_relay_host(received: Optional[Sequence[str]]) -> Optional[str]:
    """
    Get the sending host of the most recent relay hop.

    Args:
        received: Received header values; the last one is the most recent hop

    Returns:
        Lowercase host ("mail.example.com" or "[192.0.2.1]"), or None
    """
    if not received:
        return None

    words = unfold(received[-1]).split()
    for word, follower in zip(words, words[1:]):
        if word.lower() == "from" and follower:
            return follower.lower()

    return None
