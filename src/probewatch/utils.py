import logging
import time

logger = logging.getLogger(__name__)

# ────────────────────────────────
# Time Helpers
# ────────────────────────────────


def now() -> float:
    return time.monotonic()


def format_seconds(secs: float) -> str:
    sec = int(secs)
    hours, sec = divmod(sec, 3600)
    minutes, sec = divmod(sec, 60)
    if hours > 0:
        return f"{hours}h{minutes:02d}m{sec:02d}s"
    return f"{minutes}m{sec:02d}s"


# ────────────────────────────────
# Wordlist Handling
# ────────────────────────────────


def read_labels(lines) -> list[str]:
    labels = []
    for line in lines:
        value = line.strip()
        if not value or value.startswith("#"):
            continue
        labels.append(value)
    logger.debug(f"Read {len(labels)} labels from wordlist")
    return labels
