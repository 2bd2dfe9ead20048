"""Hand a rendered receipt to the spooler in raw mode."""

from __future__ import annotations

import asyncio
import logging
import subprocess
import tempfile
import time
import uuid
from pathlib import Path
from typing import Sequence

from .errors import PrintDispatchError

logger = logging.getLogger("printing")

DEFAULT_COMMAND = ("lp",)
DEFAULT_TIMEOUT = 10  # seconds


class SpoolDispatcher:
    """Write bytes to a transient file and print it with ``lp -o raw``.

    The file is removed on every exit path, including failed print
    invocations.
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_COMMAND,
        spool_dir: str | Path | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.command = list(command)
        self.spool_dir = Path(spool_dir or tempfile.gettempdir())
        self.timeout = timeout

    def spool_path(self) -> Path:
        """Return a fresh ``receipt_<ms>_<hex>.bin`` path in the spool dir."""

        stamp = int(time.time() * 1000)
        return self.spool_dir / f"receipt_{stamp}_{uuid.uuid4().hex[:8]}.bin"

    def print_command(self, target: str, path: Path) -> list[str]:
        return [*self.command, "-d", target, "-o", "raw", str(path)]

    async def send(self, target: str, data: bytes) -> str:
        """Print ``data`` on ``target`` and return the spooler's reply."""

        path = self.spool_path()
        try:
            try:
                await asyncio.to_thread(path.write_bytes, data)
            except OSError as exc:
                raise PrintDispatchError(f"cannot write spool file: {exc}") from exc

            try:
                result = await asyncio.to_thread(
                    subprocess.run,
                    self.print_command(target, path),
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                )
            except OSError as exc:
                raise PrintDispatchError(f"cannot run print command: {exc}") from exc
            except subprocess.TimeoutExpired as exc:
                raise PrintDispatchError(
                    f"print command timed out after {self.timeout}s"
                ) from exc

            if result.returncode != 0:
                detail = (result.stderr or "").strip() or f"exit status {result.returncode}"
                raise PrintDispatchError(f"print failed on {target}: {detail}")
        finally:
            path.unlink(missing_ok=True)

        reply = (result.stdout or "").strip()
        logger.info(
            "receipt spooled",
            extra={"printer": target, "bytes": len(data), "reply": reply},
        )
        return reply
