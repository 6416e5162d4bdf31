"""Supervision of running ffmpeg passes.

Each pass is launched with both output streams piped. stderr carries
diagnostics and goes through the classifier chain; stdout carries the
machine-readable ``-progress`` blocks and goes through a ProgressReducer.
Both streams are drained on their own thread so neither pipe can fill up
and stall the encoder.
"""

from __future__ import annotations

import contextvars
import logging
import subprocess  # nosec B404 - subprocess is required for FFmpeg invocation
import threading
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from burner.executor.types import ProcessOutcome
from burner.tools.classifiers import ClassifierChain
from burner.tools.ffmpeg_progress import DEFAULT_PROGRESS_STRIDE, ProgressReducer
from burner.tools.line_scanner import LineScanner
from burner.tools.terminal import TextSink

logger = logging.getLogger(__name__)

# Inserted right after the executable. -nostats keeps the human status line
# off stderr since the same data arrives on stdout.
PROGRESS_ARGS = ("-hide_banner", "-nostats", "-progress", "pipe:1")


class ProcessHandle:
    """Control surface handed to classifiers for one running process."""

    def __init__(self, process: subprocess.Popen, console: TextSink) -> None:
        self._process = process
        self._console = console
        self._killed = threading.Event()

    @property
    def killed(self) -> bool:
        """True once a kill was requested."""
        return self._killed.is_set()

    def signal(self) -> None:
        if self._killed.is_set():
            return
        self._killed.set()
        logger.debug("Killing ffmpeg process %s", self._process.pid)
        try:
            self._process.kill()
        except OSError as e:
            logger.debug("Kill failed for process %s: %s", self._process.pid, e)

    def emit(self, text: str) -> None:
        self._console.write(text)


class FFmpegSupervisor:
    """Runs ffmpeg commands and supervises their output.

    Args:
        console: Shared user-facing sink, normally a SynchronizedWriter.
        chain: Classifier chain applied to every stderr line.
        progress_stride: Number of progress blocks folded into one status line.
    """

    def __init__(
        self,
        console: TextSink,
        chain: ClassifierChain,
        progress_stride: int = DEFAULT_PROGRESS_STRIDE,
    ) -> None:
        self._console = console
        self._chain = chain
        self._progress_stride = progress_stride

    def with_progress_args(self, command: list[str]) -> list[str]:
        """Insert the progress reporting flags after the executable."""
        return [command[0], *PROGRESS_ARGS, *command[1:]]

    def run(
        self,
        command: list[str],
        cwd: Path,
        description: str = "ffmpeg",
        duration_seconds: float | None = None,
    ) -> ProcessOutcome:
        """Run a command to completion.

        Never raises for process failures; the outcome carries the error.

        Args:
            command: Full command, executable first.
            cwd: Working directory of the process.
            description: Label for logging (e.g., "pass 1").
            duration_seconds: Expected output duration, used for percentages.

        Returns:
            ProcessOutcome describing how the process ended.
        """
        outcome = ProcessOutcome()
        full_command = self.with_progress_args(command)
        logger.debug("Running %s: %s", description, " ".join(full_command))

        try:
            process = subprocess.Popen(  # nosec B603
                full_command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=cwd,
            )
        except OSError as e:
            logger.error("Could not start %s: %s", description, e)
            outcome.error = e
            return outcome

        handle = ProcessHandle(process, self._console)
        reducer = ProgressReducer(
            self._console.write,
            stride=self._progress_stride,
            duration_seconds=duration_seconds,
        )
        tail_lock = threading.Lock()

        def on_stderr_line(line: str) -> None:
            with tail_lock:
                outcome.last_lines.append(line)
            self._chain.handle(handle, line)

        assert process.stderr is not None
        assert process.stdout is not None
        # Each worker runs in its own copy of the context so log records
        # keep the file tag of the caller
        workers = [
            threading.Thread(
                target=contextvars.copy_context().run,
                args=(_drain, process.stderr, on_stderr_line, "stderr"),
                name=f"{description}-stderr",
                daemon=True,
            ),
            threading.Thread(
                target=contextvars.copy_context().run,
                args=(_drain, process.stdout, reducer.feed, "stdout"),
                name=f"{description}-stdout",
                daemon=True,
            ),
        ]
        for worker in workers:
            worker.start()
        try:
            for worker in workers:
                worker.join()
        except KeyboardInterrupt:
            logger.warning("Interrupted, stopping %s", description)
            handle.signal()
            process.wait()
            raise

        returncode = process.wait()
        outcome.returncode = returncode
        outcome.was_killed = handle.killed
        # Negative return codes mean the process was ended by a signal
        outcome.exited_normally = returncode >= 0

        if outcome.was_killed:
            logger.info("%s was stopped after a fatal diagnostic", description)
        elif returncode != 0 and outcome.exited_normally:
            logger.error("%s exited with code %d", description, returncode)
            self._dump_tail(outcome)
        else:
            logger.debug("%s completed with code %d", description, returncode)
        return outcome

    def _dump_tail(self, outcome: ProcessOutcome) -> None:
        for line in outcome.last_lines:
            self._console.write(line)


def _drain(stream: BinaryIO, consume: Callable[[str], None], name: str) -> None:
    """Feed every line of a stream to a consumer until EOF."""
    try:
        for line in LineScanner(stream):
            try:
                consume(line)
            except Exception:
                # Keep reading so ffmpeg never blocks on, or dies from, a closed pipe
                logger.exception("%s handler failed on line %r", name, line)
    except (ValueError, OSError) as e:
        # Pipe closed or process terminated
        logger.debug("%s reader stopped: %s", name, e)
    finally:
        stream.close()
