"""FFmpeg command building for two-pass burn encodes.

Each profile accumulates an ordered list of options. Order matters: ffmpeg
lets later occurrences of a flag override earlier ones. Every option records
whether it belongs to the first pass, the second pass or both; the two
argument lists are assembled from the same accumulated list.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .filters import FilterSpec
from .profiles import Profile
from .types import Option, TranscodePlan

logger = logging.getLogger(__name__)

VIDEO_CODEC = "libx264"
TUNE = "animation"
PRESET = "medium"
PIXEL_FORMAT = "yuv420p"
AUDIO_CODEC = "aac"
AUDIO_BITRATE = "128k"
AUDIO_CHANNELS = "2"

HLS_PLAYLIST_NAME = "out.m3u8"
HLS_SEGMENT_SECONDS = 10
HLS_LIST_SIZE = 0
HLS_SEGMENT_TYPE = "fmp4"

SAMPLE_SEEK_SECONDS = 60
SAMPLE_DURATION_SECONDS = 60

# Container forced for the discarded first pass output
FIRST_PASS_FORMAT = "mp4"


def format_clock(seconds: int) -> str:
    """Format whole seconds as HH:MM:SS."""
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class OptionList:
    """Ordered option accumulator shared by all profiles."""

    def __init__(self) -> None:
        self.options: list[Option] = []

    def _add(
        self, flag: str, value: str | None = None, first_pass: bool = True
    ) -> None:
        self.options.append(
            Option(flag=flag, value=value, first_pass=first_pass, second_pass=True)
        )

    def video_codec(self, codec: str) -> None:
        self._add("-c:v", codec)

    def video_bitrate(self, bitrate: str) -> None:
        self._add("-b:v", bitrate)

    def tune(self, tune: str) -> None:
        self._add("-tune", tune)

    def preset(self, preset: str) -> None:
        self._add("-preset", preset)

    def pixel_format(self, pixel_format: str) -> None:
        self._add("-pix_fmt", pixel_format)

    def filter(self, spec: FilterSpec) -> None:
        self._add("-filter_complex", spec.render())

    def audio_codec(self, codec: str) -> None:
        self._add("-c:a", codec, first_pass=False)

    def audio_bitrate(self, bitrate: str) -> None:
        self._add("-b:a", bitrate, first_pass=False)

    def audio_channels(self, channels: str) -> None:
        """Downmix the output to the given number of channels."""
        self._add("-ac", channels, first_pass=False)

    def subtitle_codec(self, codec: str) -> None:
        self._add("-c:s", codec, first_pass=False)

    def skip_subtitles(self) -> None:
        self._add("-sn", first_pass=False)

    def map(self, spec: str) -> None:
        self._add("-map", spec, first_pass=False)

    def attachment_copy(self) -> None:
        # https://superuser.com/questions/1320275/map-t-vs-map-0t-vs-tcodec-copy
        self._add("-c:t", "copy", first_pass=False)

    def hls_flags(self, flags: str) -> None:
        self._add("-hls_flags", flags, first_pass=False)

    def hls_time(self, seconds: int) -> None:
        """Target segment length; segments are cut on the next key frame."""
        self._add("-hls_time", str(seconds), first_pass=False)

    def hls_list_size(self, size: int) -> None:
        """Maximum playlist entries, 0 keeps all segments."""
        self._add("-hls_list_size", str(size), first_pass=False)

    def hls_segment_type(self, segment_type: str) -> None:
        self._add("-hls_segment_type", segment_type, first_pass=False)

    def seek(self, seconds: int) -> None:
        self._add("-ss", format_clock(seconds))

    def duration(self, seconds: int) -> None:
        self._add("-t", format_clock(seconds))


def _add_video_options(
    opts: OptionList, bitrate: str, spec: FilterSpec, codec: str | None = VIDEO_CODEC
) -> None:
    if codec:
        opts.video_codec(codec)
    opts.video_bitrate(bitrate)
    opts.tune(TUNE)
    opts.preset(PRESET)
    opts.pixel_format(PIXEL_FORMAT)
    opts.filter(spec)


def _add_stereo_audio(opts: OptionList) -> None:
    opts.audio_codec(AUDIO_CODEC)
    opts.audio_bitrate(AUDIO_BITRATE)
    opts.audio_channels(AUDIO_CHANNELS)


def build_plan(
    profile: Profile,
    input_path: Path,
    output_dir: Path,
    bitrate: str,
    spec: FilterSpec,
) -> TranscodePlan:
    """Accumulate the options of a profile for one input file.

    Args:
        profile: Selected output profile.
        input_path: Source video.
        output_dir: Shared output directory.
        bitrate: Video bitrate in ffmpeg notation.
        spec: Filter graph description.

    Returns:
        TranscodePlan holding the ordered options and output location.
    """
    stem = input_path.stem
    opts = OptionList()

    if profile is Profile.SAMPLE:
        _add_video_options(opts, bitrate, spec)
        _add_stereo_audio(opts)
        opts.skip_subtitles()
        opts.seek(SAMPLE_SEEK_SECONDS)
        opts.duration(SAMPLE_DURATION_SECONDS)
        out_dir, out_name = output_dir, f"{stem}_sample.mp4"

    elif profile is Profile.FRAGMENTED_HLS:
        _add_video_options(opts, bitrate, spec)
        _add_stereo_audio(opts)
        opts.skip_subtitles()
        opts.hls_flags("append_list")
        opts.hls_time(HLS_SEGMENT_SECONDS)
        opts.hls_list_size(HLS_LIST_SIZE)
        opts.hls_segment_type(HLS_SEGMENT_TYPE)
        out_dir, out_name = output_dir / stem, HLS_PLAYLIST_NAME

    elif profile is Profile.MUX:
        _add_video_options(opts, bitrate, spec)
        _add_stereo_audio(opts)
        opts.skip_subtitles()
        out_dir, out_name = output_dir, f"{stem}.mp4"

    elif profile is Profile.TRANSCODE:
        # Softsub: subtitles are copied as streams, not burned in
        _add_video_options(opts, bitrate, spec.without_subtitles(), codec=None)
        opts.audio_codec(AUDIO_CODEC)
        opts.audio_bitrate(AUDIO_BITRATE)
        opts.subtitle_codec("copy")
        opts.map("0:a")
        opts.map("0:s")
        opts.map("0:t")
        opts.attachment_copy()
        out_dir, out_name = output_dir, input_path.name

    else:
        raise ValueError(f"Unsupported profile: {profile}")

    return TranscodePlan(
        profile=profile,
        input_path=input_path,
        output_dir=out_dir,
        output_name=out_name,
        bitrate=bitrate,
        options=opts.options,
    )


def build_first_pass_args(plan: TranscodePlan) -> list[str]:
    """Build the arguments of the analysis pass.

    The first pass only gathers statistics: audio is dropped and the
    output is discarded to the null device.
    """
    args = ["-y", "-i", str(plan.input_path), "-pass", "1"]
    for option in plan.options:
        if option.first_pass:
            args.extend(option.to_args())
    args.append("-an")
    args.extend(["-f", FIRST_PASS_FORMAT])
    args.append(os.devnull)
    return args


def build_second_pass_args(plan: TranscodePlan) -> list[str]:
    """Build the arguments of the encoding pass.

    The output name is relative: the pass runs inside plan.output_dir.
    """
    args = ["-i", str(plan.input_path), "-pass", "2"]
    for option in plan.options:
        if option.second_pass:
            args.extend(option.to_args())
    args.append(plan.output_name)
    return args


def build_first_pass_command(plan: TranscodePlan, ffmpeg_path: Path | str) -> list[str]:
    """Full first pass command line, executable included."""
    return [str(ffmpeg_path), *build_first_pass_args(plan)]


def build_second_pass_command(
    plan: TranscodePlan, ffmpeg_path: Path | str
) -> list[str]:
    """Full second pass command line, executable included."""
    return [str(ffmpeg_path), *build_second_pass_args(plan)]
