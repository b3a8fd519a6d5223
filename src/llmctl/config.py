"""Client configuration.

A single :class:`ClientConfig` is built by the shell at startup and
handed to every command through its invocation context.  Nothing in the
package reads global settings on its own.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

DEFAULT_RPCSERVER: str = "localhost:12010"
"""llmd daemon address used when neither flag nor environment set one."""

DEFAULT_TIMEOUT: float = 30.0
"""Seconds to wait for the channel to become ready and for each RPC."""

RPCSERVER_ENV: str = "LLM_RPCSERVER"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Connection settings shared by every command of one invocation."""

    rpcserver: str = DEFAULT_RPCSERVER
    """``host:port`` of the llmd daemon."""

    timeout: float = DEFAULT_TIMEOUT
    """Upper bound in seconds for connecting and for each RPC."""

    insecure: bool = True
    """Dial without TLS.  The daemon listens in plaintext by default."""

    tls_cert_path: str | None = None
    """PEM root certificate.  Setting it switches the dial to TLS."""

    debug: bool = False
    """Enable DEBUG logging on stderr."""

    @property
    def use_tls(self) -> bool:
        """Return ``True`` when the channel must be dialled with TLS."""
        return not self.insecure or self.tls_cert_path is not None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """Build defaults, honouring ``LLM_RPCSERVER`` when present."""
        env = os.environ if environ is None else environ
        config = cls()
        rpcserver = env.get(RPCSERVER_ENV)
        if rpcserver:
            config = replace(config, rpcserver=rpcserver)
        return config
