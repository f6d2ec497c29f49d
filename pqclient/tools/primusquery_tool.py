"""pqclient.tools.primusquery_tool

Process invoker for the primusquery executable.

Invocation modes (fixed by the executable):
  ad-hoc query:   <exe> <query-file>
  index refresh:  <exe> <host> -update
  import:         <exe> <host> <port> <user> <password> <loader> -i <file>

Query and import files hold credentials, so they are securely deleted after
every attempt, whether it succeeds, fails or times out.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any, Optional

from pqclient.contracts.models import AtomicImportResult, ExecutionResult, FAILED_ATOMIC_IMPORT, PrimusQuery
from pqclient.contracts.tool_base import ProcessRunner
from pqclient.errors import ExecError, ImportFileNotFoundError, OutputParseError, QueryFileError, QueryTimeoutError
from pqclient.logging_utils import mask_argv
from pqclient.parsing.output_parser import count_errors, extract_new_record_id, repair_truncated_json
from pqclient.policy.update_gate import UpdateGate
from pqclient.query.serializer import render
from pqclient.tools.name_generator import RandomNameGenerator
from pqclient.tools.secure_files import SecureFileTool
from pqclient.tracing import TraceCollector


class PrimusQueryTool:
    """Runs queries and imports through the primusquery executable."""

    def __init__(
        self,
        executable_path: str,
        files: SecureFileTool,
        runner: ProcessRunner,
        gate: UpdateGate,
        logger,
        name_generator: Optional[RandomNameGenerator] = None,
        tracer: Optional[TraceCollector] = None,
        update_timeout_seconds: int = 60,
        default_timeout_seconds: int = 30,
        import_timeout_seconds: Optional[int] = None,
        repair_delay_seconds: float = 2.0,
        strict: bool = False,
        debug: bool = False,
        debug_query_file: str = "debug.priq",
    ):
        self.executable_path = executable_path
        self.files = files
        self.runner = runner
        self.gate = gate
        self.logger = logger
        self.names = name_generator or RandomNameGenerator()
        self.tracer = tracer or TraceCollector()
        self.update_timeout_seconds = update_timeout_seconds
        self.default_timeout_seconds = default_timeout_seconds
        self.import_timeout_seconds = import_timeout_seconds
        self.repair_delay_seconds = repair_delay_seconds
        self.strict = strict
        self.debug = debug
        self.debug_query_file = debug_query_file

    # ---- subprocess ----

    def _run(self, step: str, argv: list[str], timeout_seconds: Optional[float]) -> ExecutionResult:
        payload: dict[str, Any] = {"argv": mask_argv(argv), "timeout_seconds": timeout_seconds}
        try:
            result = self.runner.run(argv, timeout_seconds)
        except QueryTimeoutError:
            self.tracer.add(step, {**payload, "timed_out": True})
            raise
        except ExecError as e:
            self.tracer.add(step, {**payload, "timed_out": False, "returncode": e.returncode})
            self.logger.debug(f"{step} failed: {e} stderr={e.stderr!r}")
            raise
        self.tracer.add(
            step,
            {**payload, "timed_out": False, "returncode": result.returncode, "elapsed_ms": result.elapsed_ms},
        )
        return result

    def _discard_after_failure(self, path: str) -> None:
        """Securely delete path while another error is propagating."""
        try:
            self.files.secure_delete(path)
        except QueryFileError as e:
            if e.fatal:
                self.logger.critical(f"cleanup of {path} failed, file may be partially wiped: {e}")
            else:
                self.logger.error(f"cleanup of {path} failed: {e}")

    # ---- index refresh ----

    def refresh_index(self, host: str) -> bool:
        """Run `<exe> <host> -update` once per gate; return True if it ran now."""
        if self.gate.updated:
            self.logger.debug("PQ already updated")
            return False
        return self.gate.run_once(lambda: self._refresh(host))

    def _refresh(self, host: str) -> None:
        argv = [self.executable_path, host, "-update"]
        result = self._run("refresh_index", argv, self.update_timeout_seconds)
        self.logger.debug(f"update output: {result.stdout}")

    # ---- query files ----

    def _write_query_file(self, query: PrimusQuery) -> str:
        text = render(query, strict=self.strict)
        path = self.files.create_temp_file(self.names.next_name(), text)
        if self.debug:
            try:
                self.files.create_file(self.debug_query_file, text)
            except QueryFileError as e:
                self.logger.warning(f"debug copy of query not written: {e}")
        return path

    def _run_query_file(self, step: str, query: PrimusQuery, timeout_seconds: Optional[float]) -> ExecutionResult:
        if timeout_seconds is None:
            timeout_seconds = self.default_timeout_seconds
        path = self._write_query_file(query)
        try:
            result = self._run(step, [self.executable_path, path], timeout_seconds)
        except BaseException:
            self._discard_after_failure(path)
            raise
        self.files.secure_delete(path)
        self.logger.debug(f"execute output: {result.stdout}")
        return result

    def run_ad_hoc_query(self, query: PrimusQuery, timeout_seconds: Optional[float] = None) -> str:
        """Refresh the index if needed, run the query and return its stdout.

        The output directive is cleared so primusquery writes results to stdout.
        """
        if not self.gate.updated:
            self.refresh_index(query.host)
        result = self._run_query_file("ad_hoc_query", replace(query, output=""), timeout_seconds)
        return result.stdout

    def execute(self, query: PrimusQuery, timeout_seconds: Optional[float] = None) -> None:
        """Run a query for its side effect (e.g. writing query.output); no refresh."""
        self._run_query_file("execute", query, timeout_seconds)

    # ---- imports ----

    def run_import(
        self,
        path: str,
        host: str,
        port: str,
        user: str,
        password: str,
        loader_name: str,
        timeout_seconds: Optional[float] = None,
    ) -> str:
        """Bulk-load an existing file with the named loader; return stdout."""
        if not self.files.file_exists(path):
            self.logger.debug(f"{loader_name} import-file {path} does not exist")
            raise ImportFileNotFoundError(f"import-file {path} does not exist")

        if timeout_seconds is None:
            timeout_seconds = self.import_timeout_seconds
        argv = [self.executable_path, host, str(port), user, password, loader_name, "-i", path]
        try:
            result = self._run("import", argv, timeout_seconds)
        except BaseException:
            self._discard_after_failure(path)
            raise
        self.files.secure_delete(path)
        if result.stdout:
            self.logger.debug(f"import query {loader_name} output: {result.stdout}")
        return result.stdout

    def run_atomic_import(
        self,
        path: str,
        host: str,
        port: str,
        user: str,
        password: str,
        loader_name: str,
        timeout_seconds: Optional[float] = None,
    ) -> AtomicImportResult:
        """Import a single record and return (new record id, error count)."""
        output = self.run_import(path, host, port, user, password, loader_name, timeout_seconds)
        try:
            return AtomicImportResult(extract_new_record_id(output), count_errors(output))
        except OutputParseError as e:
            self.logger.debug(f"executing atomic import query {loader_name} failed: {e}")
            e.result = FAILED_ATOMIC_IMPORT
            raise

    # ---- output files ----

    def repair_output(self, path: str) -> bool:
        """Apply the truncated-array fix to a JSON file primusquery wrote."""
        return repair_truncated_json(path, self.files, delay_seconds=self.repair_delay_seconds)
