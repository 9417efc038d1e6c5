"""Splitting a file into multipart upload parts."""

from dataclasses import dataclass
from typing import Optional

from dragdropdo.const import CHUNK_SIZE, MAX_PARTS


@dataclass(frozen=True)
class ChunkPlan:
    """Number of parts and nominal part size for a file.

    Every part is ``part_size`` bytes long except the last one, which holds
    whatever remains and may be shorter.
    """

    file_size: int
    part_count: int
    part_size: int

    def byte_range(self, index: int) -> tuple[int, int]:
        """Return the ``[start, end)`` byte range of the 0-based part ``index``."""
        if not 0 <= index < self.part_count:
            raise IndexError(f"Part index {index} out of range")
        start = min(index * self.part_size, self.file_size)
        end = min(start + self.part_size, self.file_size)
        return (start, end)

    def part_lengths(self) -> list[int]:
        """Length of every part, in order."""
        lengths = []
        for index in range(self.part_count):
            start, end = self.byte_range(index)
            lengths.append(end - start)
        return lengths


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def plan_parts(file_size: int, requested_parts: Optional[int] = None) -> ChunkPlan:
    """Decide how many parts to upload a file in.

    Without a positive ``requested_parts`` one part per 5 MiB is used. The
    part count is always clamped to ``[1, MAX_PARTS]``, so an empty file is
    still uploaded as a single, empty part.

    Args:
        file_size: Size of the file in bytes.
        requested_parts: Optional number of parts asked for by the caller.

    Returns:
        The resulting ChunkPlan.
    """
    if requested_parts is None or requested_parts <= 0:
        part_count = _ceil_div(file_size, CHUNK_SIZE)
    else:
        part_count = requested_parts
    part_count = max(1, min(part_count, MAX_PARTS))
    part_size = _ceil_div(file_size, part_count)
    return ChunkPlan(file_size=file_size, part_count=part_count, part_size=part_size)
