from __future__ import annotations

import logging
from typing import Iterable


class RedactFilter(logging.Filter):
    """Masks the given strings (API key, secret) in formatted log messages."""

    def __init__(self, secrets: Iterable[str]) -> None:
        super().__init__()
        self._secrets = [s for s in secrets if s]

    @property
    def secrets(self) -> list[str]:
        return list(self._secrets)

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        msg = record.getMessage()
        redacted = msg
        for s in self._secrets:
            redacted = redacted.replace(s, "***")
        if redacted != msg:
            record.msg = redacted
            record.args = ()
        return True


def setup_logging(level: str = "INFO", redact: Iterable[str] = ()) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # httpx/httpcore can log full request URLs; keep them quiet.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    secrets = [s for s in redact if s]
    if secrets:
        # one RedactFilter per handler; repeated setup merges into it
        for h in logging.getLogger().handlers:
            merged = list(secrets)
            for f in [f for f in h.filters if isinstance(f, RedactFilter)]:
                merged.extend(s for s in f.secrets if s not in merged)
                h.removeFilter(f)
            h.addFilter(RedactFilter(merged))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
