import logging

import pytest

from pqclient.contracts.models import ExecutionResult
from pqclient.contracts.tool_base import ProcessRunner
from pqclient.policy.update_gate import UpdateGate
from pqclient.tools.name_generator import RandomNameGenerator
from pqclient.tools.primusquery_tool import PrimusQueryTool
from pqclient.tools.secure_files import SecureFileTool


class FakeRunner(ProcessRunner):
    """Records argv and replays scripted outcomes (str stdout or an exception)."""

    def __init__(self, outcomes=None):
        self.outcomes = list(outcomes or [])
        self.calls = []
        self.seen_files = {}

    def run(self, argv, timeout_seconds):
        self.calls.append((list(argv), timeout_seconds))
        # snapshot the query file while it exists
        if len(argv) == 2:
            with open(argv[1], "r", encoding="utf-8") as f:
                self.seen_files[argv[1]] = f.read()
        outcome = self.outcomes.pop(0) if self.outcomes else ""
        if isinstance(outcome, BaseException):
            raise outcome
        return ExecutionResult(argv=list(argv), stdout=outcome, stderr="", returncode=0, elapsed_ms=1)


@pytest.fixture
def logger():
    return logging.getLogger("pqclient.tests")


@pytest.fixture
def files(tmp_path, logger):
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    return SecureFileTool(logger=logger, temp_dir=str(temp_dir))


@pytest.fixture
def make_tool(files, logger, tmp_path):
    def _make(runner, gate=None, **kwargs):
        kwargs.setdefault("debug_query_file", str(tmp_path / "debug.priq"))
        return PrimusQueryTool(
            executable_path="./primusquery",
            files=files,
            runner=runner,
            gate=gate or UpdateGate(),
            logger=logger,
            name_generator=RandomNameGenerator(seed=1234),
            **kwargs,
        )

    return _make
