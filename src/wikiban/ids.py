"""Task ID generation and column header disambiguation."""

import random
import re
import string
import time

_BASE36 = string.digits + string.ascii_lowercase
_SUFFIX_RE = re.compile(r"^(.*\S)\s+\((\d+)\)$")


def generate_task_id() -> str:
    """Mint a new task ID: ``task_<epoch millis>_<9 base36 chars>``."""
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"task_{millis}_{suffix}"


def disambiguate(titles: list[str]) -> list[str]:
    """Give repeated titles a ``(N)`` suffix so every stored header is unique.

    Comparison is case-insensitive. The first occurrence keeps its title,
    the Nth one becomes ``title (N)``.

    ["Todo", "Doing", "todo"] → ["Todo", "Doing", "todo (2)"]
    """
    seen: dict[str, int] = {}
    result = []
    for title in titles:
        key = title.lower()
        seen[key] = seen.get(key, 0) + 1
        count = seen[key]
        result.append(title if count == 1 else f"{title} ({count})")
    return result


def display_titles(headers: list[str]) -> list[str]:
    """Reverse of disambiguate: drop suffixes that disambiguate() would add.

    A header ``base (N)`` is shown as ``base`` when ``base`` already
    occurred N-1 times before it. Other headers are shown as they are,
    so a column really called "Phase (2)" keeps its name.
    """
    seen: dict[str, int] = {}
    result = []
    for header in headers:
        title = header
        match = _SUFFIX_RE.match(header)
        if match:
            base, number = match.group(1), int(match.group(2))
            if number >= 2 and seen.get(base.lower(), 0) == number - 1:
                title = base
        key = title.lower()
        seen[key] = seen.get(key, 0) + 1
        result.append(title)
    return result
