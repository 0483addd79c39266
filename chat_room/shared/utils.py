"""Shared utility functions."""
import re
import unicodedata
from datetime import datetime
from typing import Optional

TAG_PATTERN = re.compile(r"<[^>]*>")


def sanitize(text: Optional[str]) -> str:
    """Strip markup and surrounding whitespace from untrusted text."""
    if text is None:
        return ""
    return TAG_PATTERN.sub("", text).strip()


def name_key(name: str) -> str:
    """Return the comparison key for a participant name.

    Case-insensitive but accent-sensitive, so "Maria" and "maria" share a
    key while "maria" and "mária" do not.
    """
    return unicodedata.normalize("NFC", name).casefold()


def format_time(moment: Optional[datetime] = None) -> str:
    moment = moment or datetime.now()
    return moment.strftime("%H:%M:%S")
