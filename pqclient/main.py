"""pqclient.main

Wiring for settings + logging + files + runner + the primusquery tool.

One UpdateGate is shared per process, so the index refresh runs at most once
no matter how many tools are built.
"""

from __future__ import annotations

from pqclient.env_loader import load_env
from pqclient.config import Settings
from pqclient.logging_utils import build_logger
from pqclient.tracing import TraceCollector

from pqclient.policy.update_gate import UpdateGate
from pqclient.tools.name_generator import RandomNameGenerator
from pqclient.tools.secure_files import SecureFileTool
from pqclient.tools.subprocess_runner import SubprocessRunner
from pqclient.tools.primusquery_tool import PrimusQueryTool

PROCESS_UPDATE_GATE = UpdateGate()


def build_primusquery_tool(settings: Settings | None = None, gate: UpdateGate | None = None) -> PrimusQueryTool:
    if settings is None:
        load_env()  # load .env if present
        settings = Settings.load()
    logger = build_logger(settings.log_dir, debug=settings.debug)

    files = SecureFileTool(logger=logger, temp_dir=settings.temp_dir)
    runner = SubprocessRunner(logger=logger)

    return PrimusQueryTool(
        executable_path=settings.executable_path,
        files=files,
        runner=runner,
        gate=gate or PROCESS_UPDATE_GATE,
        logger=logger,
        name_generator=RandomNameGenerator(),
        tracer=TraceCollector(),
        update_timeout_seconds=settings.update_timeout_seconds,
        default_timeout_seconds=settings.default_timeout_seconds,
        import_timeout_seconds=settings.import_timeout_seconds,
        repair_delay_seconds=settings.repair_delay_seconds,
        strict=settings.strict_queries,
        debug=settings.debug,
        debug_query_file=settings.debug_query_file,
    )
