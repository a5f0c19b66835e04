"""Run git subcommands via subprocess."""

import subprocess
import threading
from pathlib import Path
from typing import Optional

from ..exceptions import GitCommandError
from ..logging_config import get_logger

logger = get_logger(__name__)


class GitRunner:
    """Stateless git invocation service shared by the scoring passes.

    Every call either returns the command's stdout or raises
    GitCommandError. Callers decide how to degrade.
    """

    _CHUNK_SIZE = 1024 * 1024

    def __init__(self, timeout_seconds: int = 30, max_output_bytes: int = 10 * 1024 * 1024):
        self.timeout_seconds = timeout_seconds
        self.max_output_bytes = max_output_bytes

    def numstat(self, repo_root: str, since: str) -> str:
        """Per-commit ``adds<TAB>dels<TAB>path`` lines for commits since ``since``."""
        return self.run(repo_root, ["log", f"--since={since}", "--numstat", "--pretty=format:"])

    def authors(self, repo_root: str, path: str) -> str:
        """Author names of every commit touching ``path``, following renames, newest first."""
        return self.run(repo_root, ["log", "--follow", "--format=%an", "--", path])

    def run(self, repo_root: str, args: list[str]) -> str:
        repo_path = str(Path(repo_root).resolve())
        if not Path(repo_path).is_dir():
            raise GitCommandError(args, "no such directory", repo_path)

        try:
            proc = subprocess.Popen(
                self._command(repo_path, args),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise GitCommandError(args, f"cannot start git: {e}", repo_path)

        timed_out = threading.Event()

        def _kill() -> None:
            timed_out.set()
            proc.kill()

        # Drained separately so a chatty stderr cannot fill its pipe and stall git
        stderr_chunks: list[bytes] = []
        drain = threading.Thread(target=self._drain, args=(proc, stderr_chunks), daemon=True)
        drain.start()

        timer = threading.Timer(self.timeout_seconds, _kill)
        timer.start()
        try:
            output = self._read_bounded(proc, args, repo_path)
            proc.wait()
            drain.join()
            if timed_out.is_set():
                raise GitCommandError(
                    args, f"timed out after {self.timeout_seconds}s", repo_path
                )
            if proc.returncode != 0:
                stderr = b"".join(stderr_chunks).decode("utf-8", errors="replace")
                lines = stderr.strip().splitlines()
                raise GitCommandError(
                    args, lines[-1] if lines else f"exit code {proc.returncode}", repo_path
                )
            return output
        finally:
            timer.cancel()
            if proc.poll() is None:
                proc.kill()
                proc.wait()
            drain.join()
            if proc.stdout:
                proc.stdout.close()
            if proc.stderr:
                proc.stderr.close()

    def _command(self, repo_path: str, args: list[str]) -> list[str]:
        return ["git", "-C", repo_path, *args]

    @staticmethod
    def _drain(proc: subprocess.Popen, sink: list[bytes]) -> None:
        if proc.stderr is not None:
            sink.append(proc.stderr.read())

    def _read_bounded(self, proc: subprocess.Popen, args: list[str], repo_path: str) -> str:
        stdout = proc.stdout
        if stdout is None:
            return ""
        chunks: list[bytes] = []
        total_size = 0
        while True:
            chunk: Optional[bytes] = stdout.read(self._CHUNK_SIZE)
            if not chunk:
                break
            total_size += len(chunk)
            if total_size > self.max_output_bytes:
                logger.debug("git output passed %d bytes, aborting", self.max_output_bytes)
                raise GitCommandError(
                    args,
                    f"output exceeded {self.max_output_bytes / (1024 * 1024):g}MB limit",
                    repo_path,
                )
            chunks.append(chunk)
        return b"".join(chunks).decode("utf-8", errors="replace")
