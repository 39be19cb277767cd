"""Reading PCM audio out of RIFF/WAVE data."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike
from typing import Optional, Union

WAVE_FORMAT_PCM = 1
_WAVEFORMATEX_SIZE = 18

_RIFF = struct.Struct("<4sI4s")
_CHUNK = struct.Struct("<4sI")
_FMT = struct.Struct("<HHIIHH")
_EXT_SIZE = struct.Struct("<H")


class WavError(ValueError):
    """Raised when data is not a readable WAV file."""


@dataclass(frozen=True)
class WaveFormat:
    """PCM format description of the samples."""

    channels: int
    samples_per_sec: int
    bits_per_sample: int
    format_tag: int = WAVE_FORMAT_PCM
    cb_size: int = _WAVEFORMATEX_SIZE

    @property
    def block_align(self) -> int:
        """Bytes per sample frame."""
        return (self.bits_per_sample >> 3) * self.channels

    @property
    def avg_bytes_per_sec(self) -> int:
        """Bytes per second of audio."""
        return self.block_align * self.samples_per_sec


@dataclass(frozen=True)
class AudioResource:
    """Format and sample bytes of a WAV file; 8-bit samples are stored signed."""

    wave_format: WaveFormat
    data: bytes

    @property
    def audio_bytes(self) -> int:
        """Number of sample bytes."""
        return len(self.data)

    @classmethod
    def parse(cls, data: bytes) -> "AudioResource":
        """Parse the bytes of a WAV file."""
        size = len(data)
        if size < _RIFF.size:
            raise WavError("file too short for a RIFF header")
        tag, _, kind = _RIFF.unpack_from(data, 0)
        if tag != b"RIFF":
            raise WavError("not in RIFF format")
        if kind != b"WAVE":
            raise WavError("not in WAVE format")

        read = _RIFF.size
        fmt: Optional[tuple[int, ...]] = None
        samples = b""
        while size > read:
            if read + _CHUNK.size > size:
                raise WavError("truncated chunk header")
            chunk_tag, chunk_size = _CHUNK.unpack_from(data, read)
            read += _CHUNK.size

            if chunk_tag == b"fmt ":
                if read + _FMT.size > size:
                    raise WavError("truncated fmt chunk")
                fmt = _FMT.unpack_from(data, read)
                read += _FMT.size
                if chunk_size > _FMT.size:
                    if read + _EXT_SIZE.size > size:
                        raise WavError("truncated fmt extension")
                    (ext_size,) = _EXT_SIZE.unpack_from(data, read)
                    read += _EXT_SIZE.size
                    if read + chunk_size == size:
                        break
                    read += ext_size
            elif chunk_tag == b"data":
                samples = data[read:read + chunk_size]
                read += chunk_size
                if fmt is not None and fmt[5] == 8:
                    samples = bytes((b - 128) & 0xFF for b in samples)
            else:
                if read + chunk_size == size:
                    break
                read += chunk_size

        if fmt is None:
            raise WavError("missing fmt chunk")
        _, channels, sample_rate, _, _, bits = fmt
        return cls(WaveFormat(channels, sample_rate, bits), samples)

    @classmethod
    def load(cls, path: Union[str, PathLike]) -> "AudioResource":
        """Read and parse a WAV file from disk."""
        with open(path, "rb") as stream:
            return cls.parse(stream.read())