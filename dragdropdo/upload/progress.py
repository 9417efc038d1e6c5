"""Upload progress reporting."""

from collections.abc import Callable
from typing import Optional

from tqdm import tqdm

from dragdropdo.models import UploadProgress

UploadProgressCallback = Callable[[UploadProgress], None]


def make_progress(
    current_part: int, total_parts: int, bytes_uploaded: int, total_bytes: int
) -> UploadProgress:
    """Build a progress event. An empty file counts as fully uploaded."""
    if total_bytes > 0:
        percentage = (bytes_uploaded * 100) // total_bytes
    else:
        percentage = 100
    return UploadProgress(
        current_part=current_part,
        total_parts=total_parts,
        bytes_uploaded=bytes_uploaded,
        total_bytes=total_bytes,
        percentage=percentage,
    )


class TqdmUploadProgress:
    """Progress callback rendering a tqdm bar in bytes.

    Example:
        with TqdmUploadProgress(desc="report.pdf") as progress:
            client.upload_file("report.pdf", "report.pdf", on_progress=progress)
    """

    def __init__(
        self, desc: Optional[str] = None, disable: bool = False, **tqdm_kwargs
    ) -> None:
        """Initialize the progress bar.

        Args:
            desc: Label shown in front of the bar.
            disable: Whether to suppress all output.
            **tqdm_kwargs: Extra arguments for the tqdm bar, e.g. ``file``.
        """
        self._desc = desc
        self._disable = disable
        self._tqdm_kwargs = tqdm_kwargs
        self._bar: Optional[tqdm] = None

    def __call__(self, progress: UploadProgress) -> None:
        if self._bar is None:
            self._bar = tqdm(
                total=progress.total_bytes,
                desc=self._desc,
                unit="B",
                unit_scale=True,
                disable=self._disable,
                **self._tqdm_kwargs,
            )
        self._bar.update(progress.bytes_uploaded - self._bar.n)
        self._bar.set_postfix(part=f"{progress.current_part}/{progress.total_parts}")

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def __enter__(self) -> "TqdmUploadProgress":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
