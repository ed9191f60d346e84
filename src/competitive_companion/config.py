"""Runtime configuration loaded from the environment."""

import os
import sys
from dataclasses import dataclass, field

from dotenv import load_dotenv
from loguru import logger

# Ports the well-known receiver tools listen on
DEFAULT_PORTS: tuple[int, ...] = (1327, 4244, 6174, 10042, 10043, 10045, 27121)


def _parse_ports(value: str | None, default: tuple[int, ...] = ()) -> tuple[int, ...]:
    if value is None or not value.strip():
        return default

    ports = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        port = int(part)
        if not 0 < port < 65536:
            raise ValueError(f"Invalid port: {port}")
        ports.append(port)
    return tuple(ports)


def _parse_list(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    ports: tuple[int, ...] = DEFAULT_PORTS
    custom_ports: tuple[int, ...] = ()
    http_timeout: float = 15.0
    delivery_timeout: float = 5.0
    granted_origins: tuple[str, ...] = field(default_factory=tuple)
    log_level: str = "INFO"
    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    @property
    def all_ports(self) -> tuple[int, ...]:
        """Default and custom ports, de-duplicated, order kept."""
        return tuple(dict.fromkeys([*self.ports, *self.custom_ports]))

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        defaults = cls()
        return cls(
            ports=_parse_ports(os.getenv("COMPANION_PORTS"), DEFAULT_PORTS),
            custom_ports=_parse_ports(os.getenv("COMPANION_CUSTOM_PORTS")),
            http_timeout=float(os.getenv("COMPANION_HTTP_TIMEOUT", defaults.http_timeout)),
            delivery_timeout=float(
                os.getenv("COMPANION_DELIVERY_TIMEOUT", defaults.delivery_timeout)
            ),
            granted_origins=_parse_list(os.getenv("COMPANION_GRANTED_ORIGINS")),
            log_level=os.getenv("COMPANION_LOG_LEVEL", defaults.log_level).upper(),
            user_agent=os.getenv("COMPANION_USER_AGENT", defaults.user_agent),
        )


def get_settings() -> Settings:
    """Load settings from the environment (and a .env file if present)."""
    return Settings.from_env()


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a single stderr sink."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )
