"""Resource lookup and waveform sampling for voice messages."""

from __future__ import annotations

import struct
import sys
from pathlib import Path

_WAV_HEADER_BYTES = 44
_FULL_SCALE = 32768.0


def resource_path(file_name: str, base_dir: str | Path | None = None) -> Path:
    """Return the path of a bundled resource two levels above ``base_dir``.

    ``base_dir`` defaults to the directory of the running program.
    """
    if base_dir is None:
        base_dir = Path(sys.argv[0]).resolve().parent
    return Path(base_dir) / ".." / ".." / "Resources" / file_name


def sample_amplitudes(path: str | Path, step: int = 300) -> list[float]:
    """Read 16-bit PCM after a 44-byte WAV header; return every ``step``-th |sample| / 32768."""
    if step <= 0:
        raise ValueError("step must be positive")
    raw = Path(path).read_bytes()
    if len(raw) < _WAV_HEADER_BYTES:
        raise ValueError(f"{path}: shorter than a WAV header")
    data = raw[_WAV_HEADER_BYTES:]
    data = data[: len(data) - len(data) % 2]
    samples = [value for (value,) in struct.iter_unpack("<h", data)]
    return [abs(sample) / _FULL_SCALE for sample in samples[::step]]