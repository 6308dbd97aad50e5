"""Selection of the player application to address."""

import platform
from dataclasses import dataclass

from src.utils.config import PlayerConfig
from src.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TargetApp:
    """The application every generated command is addressed to."""

    name: str
    is_modern: bool = True

    @property
    def script_suffix(self) -> str:
        """Infix used to pick the composite script flavour for this app."""
        return "music." if self.is_modern else ""


def parse_version(version: str) -> tuple[int, ...]:
    """Parse a dotted version string, ignoring non-numeric components."""
    parts = []
    for part in version.split("."):
        if not part.isdigit():
            break
        parts.append(int(part))
    return tuple(parts)


def resolve_target(config: PlayerConfig, mac_version: str | None = None) -> TargetApp:
    """Resolve the target application once, at startup.

    Args:
        config: Player configuration
        mac_version: macOS version string; read from the host when omitted

    Returns:
        TargetApp for the modern player on macOS >= the configured threshold
        (and on hosts that report no macOS version), the legacy one otherwise.
    """
    if config.app_name:
        logger.debug("target_app_configured", app=config.app_name)
        return TargetApp(
            name=config.app_name,
            is_modern=config.app_name != config.legacy_app_name,
        )

    if mac_version is None:
        mac_version = platform.mac_ver()[0]

    version = parse_version(mac_version)
    is_modern = not version or version >= config.modern_min_version_tuple
    name = config.modern_app_name if is_modern else config.legacy_app_name

    logger.debug("target_app_resolved", app=name, macos_version=mac_version or None)
    return TargetApp(name=name, is_modern=is_modern)
