from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional


@dataclass(frozen=True)
class ClientConfig:
    """
    ClientConfig says where the card server lives and how lines are encoded.

    Note:
    - There is deliberately no timeout knob: reads block until data,
      end of stream or a transport error.
    - The server speaks one request at a time; nothing here enables pipelining.
    """
    host: str
    port: int
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("host cannot be empty")
        if not isinstance(self.port, int) or not (1 <= self.port <= 65535):
            raise ValueError(f"port must be in 1..65535, got {self.port!r}")
        if not self.encoding:
            raise ValueError("encoding cannot be empty")

    @staticmethod
    def DEFAULT() -> "ClientConfig":
        return ClientConfig(host="netsrv.cim.rhul.ac.uk", port=1812)

    @staticmethod
    def LOCAL() -> "ClientConfig":
        return ClientConfig(host="127.0.0.1", port=1812)

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """
        DEFAULT() overridden by HOLLOMON_HOST / HOLLOMON_PORT / HOLLOMON_ENCODING.
        """
        env = os.environ if env is None else env
        base = ClientConfig.DEFAULT()

        raw_port = env.get("HOLLOMON_PORT")
        try:
            port = int(raw_port) if raw_port else base.port
        except ValueError:
            raise ValueError(f"HOLLOMON_PORT must be an integer, got {raw_port!r}") from None

        return ClientConfig(
            host=env.get("HOLLOMON_HOST") or base.host,
            port=port,
            encoding=env.get("HOLLOMON_ENCODING") or base.encoding,
        )

    def with_address(self, host: str, port: int) -> "ClientConfig":
        return replace(self, host=host, port=int(port))

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"
