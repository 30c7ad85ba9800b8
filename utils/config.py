"""
Connection settings for a phpList REST API endpoint.

Read from the environment (override the prefix if you run several clients):

    PHPLIST_URL       e.g. https://example.com/lists/admin/?pi=restapi&page=call
    PHPLIST_LOGIN     admin login
    PHPLIST_PASSWORD  matching password
    PHPLIST_SECRET    optional remote processing secret
    PHPLIST_TIMEOUT   optional request timeout in seconds (default 2.0)
"""

import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from api_client import DEFAULT_TIMEOUT
from utils.log import redact


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    url: str
    login: str
    password: str
    secret: str = ""
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, prefix: str = "PHPLIST_", environ: Optional[Mapping[str, str]] = None):
        env = os.environ if environ is None else environ

        def required(name):
            value = (env.get(prefix + name) or "").strip()
            if not value:
                raise ConfigError(f"missing environment variable {prefix + name}")
            return value

        raw_timeout = (env.get(prefix + "TIMEOUT") or "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigError(f"{prefix}TIMEOUT is not a number: {raw_timeout!r}") from None
            if timeout <= 0:
                raise ConfigError(f"{prefix}TIMEOUT must be positive, got {timeout}")
        else:
            timeout = DEFAULT_TIMEOUT

        return cls(
            url=required("URL"),
            login=required("LOGIN"),
            password=required("PASSWORD"),
            secret=env.get(prefix + "SECRET", ""),
            timeout=timeout,
        )

    def redacted(self) -> Dict[str, object]:
        return redact({
            "url": self.url,
            "login": self.login,
            "password": self.password,
            "secret": self.secret,
            "timeout": self.timeout,
        })
