"""pqclient.tools.subprocess_runner

Runs the primusquery executable with a deadline.

The timeout is turned into an absolute monotonic deadline when the call starts.
On POSIX the child runs in its own session, and on expiry the whole process
group is killed, so a shell wrapper's children cannot keep the output pipes
open past the deadline. Reaping after the kill is bounded as well.
"""

from __future__ import annotations
import os
import signal
import subprocess
import time
from typing import Optional, Sequence

from pqclient.contracts.models import ExecutionResult
from pqclient.contracts.tool_base import ProcessRunner
from pqclient.errors import ExecError, QueryTimeoutError
from pqclient.logging_utils import mask_argv

_POSIX = os.name == "posix"
REAP_TIMEOUT_SECONDS = 2.0


def _decode(data: Optional[bytes]) -> str:
    return (data or b"").decode("utf-8", errors="replace")


class SubprocessRunner(ProcessRunner):
    """subprocess-based ProcessRunner (no shell)."""

    def __init__(self, logger):
        self.logger = logger

    def _kill(self, proc: subprocess.Popen) -> None:
        if _POSIX:
            try:
                os.killpg(proc.pid, signal.SIGKILL)
            except ProcessLookupError:
                # group already gone; the leader is reaped below
                self.logger.debug(f"process group {proc.pid} already exited")
        else:
            proc.kill()
        try:
            proc.communicate(timeout=REAP_TIMEOUT_SECONDS)
        except subprocess.TimeoutExpired:
            self.logger.warning(f"primusquery pid {proc.pid} still holds its pipes after kill; closing them")
            for pipe in (proc.stdout, proc.stderr):
                if pipe:
                    pipe.close()

    def run(self, argv: Sequence[str], timeout_seconds: Optional[float]) -> ExecutionResult:
        args = [str(a) for a in argv]
        if not args:
            raise ValueError("argv must not be empty")

        start = time.monotonic()
        deadline = start + timeout_seconds if timeout_seconds is not None else None

        try:
            proc = subprocess.Popen(  # nosec B603 - fixed argv, no shell
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=_POSIX,
            )
        except OSError as e:
            raise ExecError(f"cannot launch {args[0]}: {e}", argv=mask_argv(args)) from e

        try:
            remaining = max(0.0, deadline - time.monotonic()) if deadline is not None else None
            stdout, stderr = proc.communicate(timeout=remaining)
        except subprocess.TimeoutExpired as e:
            self._kill(proc)
            self.logger.debug(f"primusquery timeout after {timeout_seconds}s: {mask_argv(args)}")
            raise QueryTimeoutError(
                f"primusquery timed out after {timeout_seconds}s",
                argv=mask_argv(args),
                timeout_seconds=timeout_seconds,
            ) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        out, err = _decode(stdout), _decode(stderr)
        if proc.returncode != 0:
            raise ExecError(
                f"primusquery exited with status {proc.returncode}",
                argv=mask_argv(args),
                returncode=proc.returncode,
                stderr=err,
            )
        return ExecutionResult(argv=args, stdout=out, stderr=err, returncode=proc.returncode, elapsed_ms=elapsed_ms)
