"""Request-scoped state: secrets to mask and the accumulated diagnostic log."""

from __future__ import annotations

from dataclasses import dataclass, field

from ipmiserver.ipmi._util import redact


@dataclass
class RequestContext:
    """Per-request diagnostic log plus the secrets that must never leave it.

    One instance is created for every incoming request and discarded with it.
    Everything appended through :meth:`add_debug` is redacted first.
    """

    secrets: tuple[str, ...] = ()
    debug: list[str] = field(default_factory=list)

    def redact(self, text: str) -> str:
        # longest first, so a secret containing another is masked whole
        for secret in sorted(self.secrets, key=len, reverse=True):
            text = redact(secret, text)
        return text

    def add_debug(self, message: str) -> str:
        """Redact ``message``, append it to the log and return the redacted text."""
        cleaned = self.redact(message)
        self.debug.append(cleaned)
        return cleaned

    def debug_text(self) -> str:
        return "\n".join(self.debug)
