"""Media introspection through ffprobe."""

from burner.introspector.ffprobe import parse_duration, probe_duration

__all__ = ["parse_duration", "probe_duration"]
