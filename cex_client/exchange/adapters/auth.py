from __future__ import annotations

import hmac
import os
from dataclasses import dataclass, field
from hashlib import sha256

from cex_client.core.errors import ConfigurationError

ENV_USER = "CEXIO_USERNAME"
ENV_KEY = "CEXIO_API_KEY"
ENV_SECRET = "CEXIO_API_SECRET"


@dataclass(frozen=True)
class Credentials:
    user: str
    key: str
    secret: str = field(repr=False)

    def __post_init__(self) -> None:
        missing = [n for n in ("user", "key", "secret") if not (getattr(self, n) or "").strip()]
        if missing:
            raise ConfigurationError(f"Missing CEX.IO credentials: {', '.join(missing)}")


def load_credentials_from_env() -> Credentials:
    u = os.environ.get(ENV_USER, "").strip()
    k = os.environ.get(ENV_KEY, "").strip()
    s = os.environ.get(ENV_SECRET, "").strip()
    if not u or not k or not s:
        raise ConfigurationError(
            f"Missing CEX.IO credentials. Set {ENV_USER}, {ENV_KEY} and {ENV_SECRET} in environment."
        )
    return Credentials(user=u, key=k, secret=s)


def sign_nonce(nonce: int, creds: Credentials) -> str:
    # CEX.IO signs nonce + username + api key; request params are not part of the message
    message = f"{nonce}{creds.user}{creds.key}"
    return hmac.new(creds.secret.encode("utf-8"), message.encode("utf-8"), sha256).hexdigest().upper()
