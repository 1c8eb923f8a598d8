"""Library configuration for pyripe."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyripe._constants import DEFAULT_AES_KEY_LENGTH, DEFAULT_RSA_LENGTH


@dataclasses.dataclass(frozen=True)
class RipeConfig:
    """Defaults applied by :class:`~pyripe.client.RipeClient`.

    Parameters
    ----------
    rsa_key_length : int
        Modulus length in bits for generated RSA key pairs.
    aes_key_length : int
        Length in bytes of generated AES keys (16, 24, or 32).
    rsa_passphrase : str or None
        Passphrase protecting private keys, used when generating pairs and
        when no explicit passphrase is passed to decrypt/sign.
    log_level : str
        Level name passed to :func:`pyripe.configure_logging` by the CLI.
    """

    rsa_key_length: int = DEFAULT_RSA_LENGTH
    aes_key_length: int = DEFAULT_AES_KEY_LENGTH
    rsa_passphrase: str | None = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, **overrides: Any) -> RipeConfig:
        """Create configuration from ``RIPE_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        RipeConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        rsa_env = env.get("RIPE_RSA_KEY_LENGTH")
        if rsa_env is not None and "rsa_key_length" not in overrides:
            config_kwargs["rsa_key_length"] = int(rsa_env)

        aes_env = env.get("RIPE_AES_KEY_LENGTH")
        if aes_env is not None and "aes_key_length" not in overrides:
            config_kwargs["aes_key_length"] = int(aes_env)

        passphrase_env = env.get("RIPE_RSA_PASSPHRASE")
        if passphrase_env:
            config_kwargs["rsa_passphrase"] = passphrase_env

        level_env = env.get("RIPE_LOG_LEVEL")
        if level_env:
            config_kwargs["log_level"] = level_env.strip().upper()

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
