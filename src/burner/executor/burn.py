"""Burn orchestration.

Runs the two-pass encode of every input file in turn. A failure aborts
only the file it happened on; the run continues with the next file.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Sequence
from pathlib import Path

from burner.config.models import VideoConfig
from burner.core.file_utils import link_source, remove_quietly
from burner.exceptions import PassFailedError, ProbeError
from burner.executor.bitrate import advise_bitrate, format_bitrate, parse_bitrate
from burner.executor.command import (
    SAMPLE_DURATION_SECONDS,
    build_first_pass_command,
    build_plan,
    build_second_pass_command,
)
from burner.executor.ffmpeg_base import FFmpegSupervisor
from burner.executor.filters import AUTO_WIDTH, FilterSpec
from burner.executor.profiles import Profile
from burner.executor.types import (
    BurnSummary,
    PassLogFiles,
    TranscodePlan,
    TranscodeResult,
)
from burner.introspector.ffprobe import probe_duration
from burner.logging.context import file_context, format_file_tag
from burner.tools.terminal import TextSink

logger = logging.getLogger(__name__)


class BurnExecutor:
    """Burns subtitles into every input file with a two-pass encode.

    Args:
        profile: Output profile applied to every file.
        output_dir: Directory receiving the outputs.
        ffmpeg_path: ffmpeg executable.
        ffprobe_path: ffprobe executable, None disables bitrate advisory.
        video: Target video shaping.
        supervisor: Runs and supervises the ffmpeg passes.
        console: User-facing sink.
        verbose: Echo every command before running it.
    """

    def __init__(
        self,
        profile: Profile,
        output_dir: Path,
        ffmpeg_path: Path,
        ffprobe_path: Path | None,
        video: VideoConfig,
        supervisor: FFmpegSupervisor,
        console: TextSink,
        verbose: bool = False,
    ) -> None:
        self._profile = profile
        self._output_dir = output_dir
        self._ffmpeg_path = ffmpeg_path
        self._ffprobe_path = ffprobe_path
        self._video = video
        self._supervisor = supervisor
        self._console = console
        self._verbose = verbose

    def burn_all(self, files: Sequence[Path]) -> BurnSummary:
        """Burn every file in order.

        Returns:
            Summary with one result per file.
        """
        summary = BurnSummary()
        total = len(files)
        for index, path in enumerate(files, start=1):
            self._console.write(f"{format_file_tag(index, total)} {path.name}")
            with file_context(index, total, path):
                summary.results.append(self.burn(path))
        logger.debug(
            "Run finished: %d processed, %d failed",
            summary.processed,
            summary.failed,
        )
        return summary

    def burn(self, path: Path) -> TranscodeResult:
        """Burn a single file.

        Never raises for per-file failures; the result carries the error.
        """
        link: Path | None = None
        plan: TranscodePlan | None = None
        bitrate: str | None = None
        try:
            # The filter graph reads subtitles from a plain-named link so
            # source names never need escaping beyond the directory part
            link = link_source(path, self._output_dir)
            bitrate, duration = self._effective_bitrate(path)

            spec = FilterSpec(
                subtitle_path=str(link),
                width=AUTO_WIDTH,
                height=self._video.height,
                upscaling_allowed=self._video.upscaling,
            )
            plan = build_plan(self._profile, path, self._output_dir, bitrate, spec)
            plan.output_dir.mkdir(parents=True, exist_ok=True)

            if self._profile is Profile.SAMPLE:
                duration = float(SAMPLE_DURATION_SECONDS)
            first_pass = build_first_pass_command(plan, self._ffmpeg_path)
            second_pass = build_second_pass_command(plan, self._ffmpeg_path)
            self._run_pass(1, first_pass, plan, duration)
            self._run_pass(2, second_pass, plan, duration)
        except (OSError, ProbeError, PassFailedError) as e:
            logger.error("%s: %s", path.name, e)
            return TranscodeResult(
                input_path=path,
                success=False,
                bitrate=bitrate,
                error_message=str(e),
            )
        finally:
            if plan is not None:
                PassLogFiles(plan.output_dir).cleanup()
            if link is not None:
                remove_quietly(link)

        return TranscodeResult(
            input_path=path,
            success=True,
            output_path=plan.output_path,
            bitrate=bitrate,
        )

    def _effective_bitrate(self, path: Path) -> tuple[str, float | None]:
        """Decide the bitrate for a file.

        Returns:
            Tuple of (bitrate, probed duration or None).

        Raises:
            ProbeError: If probing fails.
            OSError: If the source cannot be inspected.
        """
        target = self._video.bitrate
        if self._video.keep_bitrate or self._ffprobe_path is None:
            return target, None

        duration = probe_duration(self._ffprobe_path, path)
        if duration <= 0:
            logger.warning(
                "Duration of %s is %.3fs, keeping bitrate %s",
                path.name,
                duration,
                target,
            )
            return target, None

        target_kilobit = parse_bitrate(target)
        if target_kilobit <= 0:
            return target, duration

        advised = advise_bitrate(duration, target_kilobit, path.stat().st_size)
        if advised == target_kilobit:
            return target, duration
        if advised <= 0:
            logger.warning(
                "Source is too small for any video bitrate, keeping %s", target
            )
            return target, duration

        bitrate = format_bitrate(advised)
        logger.info("bitrate was modified to %s", bitrate)
        return bitrate, duration

    def _run_pass(
        self,
        number: int,
        command: list[str],
        plan: TranscodePlan,
        duration: float | None,
    ) -> None:
        if self._verbose:
            self._console.write(shlex.join(command))

        outcome = self._supervisor.run(
            command,
            cwd=plan.output_dir,
            description=f"pass {number}",
            duration_seconds=duration,
        )
        if outcome.error is not None:
            raise PassFailedError(
                number, None, f"pass {number} could not start: {outcome.error}"
            )
        if outcome.was_killed:
            raise PassFailedError(
                number,
                outcome.returncode,
                f"pass {number} was stopped after a fatal diagnostic",
            )
        if not outcome.success:
            raise PassFailedError(number, outcome.returncode)
