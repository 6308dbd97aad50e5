"""osascript bridge used to talk to the player on macOS."""

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from src.utils.config import BridgeConfig
from src.utils.logging import get_logger

from .codec import decode_reply, parameter_preamble
from .errors import BridgeError

logger = get_logger(__name__)


class Bridge(Protocol):
    """What the dispatcher needs from a scripting bridge.

    Replies are already decoded: None for an empty reply, a scalar, or a
    list/dict for composite values.
    """

    async def submit(self, command: str) -> Any:
        """Run an inline AppleScript command."""
        ...

    async def submit_file(self, path: Path, params: dict[str, Any] | None = None) -> Any:
        """Run an AppleScript file, defining `params` as script variables first."""
        ...


class OsascriptBridge:
    """Runs AppleScript through the `osascript` command line tool."""

    def __init__(
        self,
        osascript_path: str = "osascript",
        timeout: float | None = None,
    ) -> None:
        """Initialize the bridge.

        Args:
            osascript_path: osascript executable
            timeout: Seconds to wait for a reply; None waits indefinitely
        """
        self.osascript_path = osascript_path
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: BridgeConfig) -> "OsascriptBridge":
        return cls(osascript_path=config.osascript_path, timeout=config.timeout_seconds)

    async def _run(self, *args: str) -> Any:
        """Run osascript with `args` and decode its output.

        Raises:
            BridgeError: If osascript can't be started, fails or times out
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self.osascript_path,
                "-ss",
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise BridgeError(f"Failed to run AppleScript: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            logger.error("applescript_timeout", timeout=self.timeout)
            raise BridgeError("AppleScript timed out")

        if process.returncode != 0:
            error_msg = stderr.decode("utf-8", errors="replace").strip()
            logger.error("applescript_error", error=error_msg, returncode=process.returncode)
            raise BridgeError(error_msg or "AppleScript failed", process.returncode)

        return decode_reply(stdout.decode("utf-8", errors="replace"))

    async def submit(self, command: str) -> Any:
        logger.debug("applescript_submit", script=command[:100])
        return await self._run("-e", command)

    async def submit_file(self, path: Path, params: dict[str, Any] | None = None) -> Any:
        logger.debug("applescript_submit_file", path=str(path), params=params)
        if not params:
            return await self._run(str(path))

        try:
            source = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise BridgeError(f"Cannot read script {path}: {e}") from e

        script = parameter_preamble(params) + "\n" + source
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".applescript", delete=False, encoding="utf-8"
        ) as f:
            f.write(script)
            temp_path = f.name

        try:
            return await self._run(temp_path)
        finally:
            os.unlink(temp_path)
