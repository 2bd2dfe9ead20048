import asyncio
import subprocess
from pathlib import Path

import pytest

from till.app.printing import PrintDispatchError, SpoolDispatcher

DATA = b"\x1b@receipt\x1bi"


def _seen_file(seen):
    def on_call(cmd):
        path = Path(cmd[-1])
        seen["path"] = path
        seen["content"] = path.read_bytes()

    return on_call


def test_send_writes_raw_file_and_cleans_up(tmp_path, fake_run):
    seen = {}
    fake = fake_run(stdout="request id is POS-58-12 (1 file(s))\n", on_call=_seen_file(seen))
    reply = asyncio.run(SpoolDispatcher(spool_dir=tmp_path).send("POS-58", DATA))

    assert reply == "request id is POS-58-12 (1 file(s))"
    cmd = fake.calls[0]
    assert cmd[:5] == ["lp", "-d", "POS-58", "-o", "raw"]
    assert seen["content"] == DATA
    assert seen["path"].parent == tmp_path
    assert seen["path"].name.startswith("receipt_")
    assert seen["path"].suffix == ".bin"
    assert not seen["path"].exists()
    assert list(tmp_path.iterdir()) == []


def test_failed_print_still_removes_file(tmp_path, fake_run):
    seen = {}
    fake_run(returncode=1, stderr="lp: The printer or class does not exist.\n", on_call=_seen_file(seen))
    with pytest.raises(PrintDispatchError) as exc:
        asyncio.run(SpoolDispatcher(spool_dir=tmp_path).send("POS-58", DATA))

    assert "does not exist" in exc.value.message
    assert seen["content"] == DATA
    assert not seen["path"].exists()
    assert list(tmp_path.iterdir()) == []


@pytest.mark.parametrize(
    "error",
    [
        FileNotFoundError("lp"),
        PermissionError(13, "Permission denied", "lp"),
        subprocess.TimeoutExpired(["lp"], 10),
    ],
)
def test_command_errors_remove_file(tmp_path, fake_run, error):
    fake_run(exc=error)
    with pytest.raises(PrintDispatchError):
        asyncio.run(SpoolDispatcher(spool_dir=tmp_path).send("POS-58", DATA))
    assert list(tmp_path.iterdir()) == []


def test_unwritable_spool_dir(tmp_path, fake_run):
    fake = fake_run()
    dispatcher = SpoolDispatcher(spool_dir=tmp_path / "missing")
    with pytest.raises(PrintDispatchError, match="cannot write"):
        asyncio.run(dispatcher.send("POS-58", DATA))
    assert fake.calls == []


def test_spool_paths_are_unique(tmp_path):
    dispatcher = SpoolDispatcher(spool_dir=tmp_path)
    paths = {dispatcher.spool_path() for _ in range(50)}
    assert len(paths) == 50


def test_custom_print_command(tmp_path, fake_run):
    fake = fake_run()
    dispatcher = SpoolDispatcher(command=["lp", "-h", "cups.local"], spool_dir=tmp_path)
    asyncio.run(dispatcher.send("POS-80", DATA))
    assert fake.calls[0][:7] == ["lp", "-h", "cups.local", "-d", "POS-80", "-o", "raw"]
