"""Find POS printers known to the CUPS spooler."""

from __future__ import annotations

import asyncio
import logging
import subprocess
from typing import List, Sequence

from .errors import DiscoveryError

logger = logging.getLogger("printing")

DEFAULT_MARKER = "POS"
DEFAULT_COMMAND = ("lpstat", "-e")
DEFAULT_TIMEOUT = 10  # seconds


def parse_candidates(output: str, marker: str = DEFAULT_MARKER) -> List[str]:
    """Return destination names from ``output`` that contain ``marker``.

    ``output`` holds one destination per line; order is preserved and the
    match is case sensitive.
    """

    names = (line.strip() for line in output.splitlines())
    return [name for name in names if name and marker in name]


class PrinterDiscovery:
    """Query the spooler for destinations and keep the POS ones."""

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_COMMAND,
        marker: str = DEFAULT_MARKER,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.command = list(command)
        self.marker = marker
        self.timeout = timeout

    async def list_candidates(self) -> List[str]:
        """Return matching printer names, possibly empty.

        Raises :class:`DiscoveryError` when the query itself fails.
        """

        try:
            result = await asyncio.to_thread(
                subprocess.run,
                self.command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except OSError as exc:
            raise DiscoveryError(f"cannot run spooler query: {exc}") from exc
        except subprocess.TimeoutExpired as exc:
            raise DiscoveryError(
                f"spooler query timed out after {self.timeout}s"
            ) from exc

        if result.returncode != 0:
            detail = (result.stderr or "").strip() or f"exit status {result.returncode}"
            logger.error("printer discovery failed", extra={"detail": detail})
            raise DiscoveryError(f"printer discovery failed: {detail}")

        printers = parse_candidates(result.stdout or "", self.marker)
        logger.info(
            "printer discovery finished", extra={"printers": printers}
        )
        return printers
