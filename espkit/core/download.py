"""
Network download manager with progress tracking.

This module provides the fetch-and-place capability used by the installers:
- HTTP/HTTPS downloads with TLS verification
- Progress reporting (bytes, percentage, speed, ETA)
- Timeout handling
- Optional in-place extraction of the downloaded archive

Downloads are attempted once. A failed transfer raises DownloadError and the
caller decides what to do with it.
"""

import functools
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

import requests
from requests.exceptions import RequestException

from espkit.core.exceptions import EspkitError
from espkit.core.filesystem import extract_archive

logger = logging.getLogger(__name__)


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float  # bytes per second
    eta_seconds: float  # estimated time remaining

    def __str__(self) -> str:
        """Format progress for display."""
        return format_progress(self)


class DownloadError(EspkitError):
    """Exception raised when download fails."""

    pass


def download_file(
    url: str,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    timeout: int = 30,
) -> Path:
    """
    Download file from URL to destination.

    Args:
        url: URL to download from
        destination: Local path to save file
        progress_callback: Optional callback for progress updates
        timeout: Request timeout in seconds

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If the request fails or the server returns an error status
        ValueError: If URL or destination is invalid

    Example:
        >>> url = "https://example.com/rust-1.62.1.0-x86_64-unknown-linux-gnu.tar.xz"
        >>> download_file(url, Path("dist/rust.tar.xz"))
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    try:
        return _download_with_progress(url, destination, progress_callback, timeout)
    except RequestException as e:
        raise DownloadError(f"Download of {url} failed: {e}") from e
    except OSError as e:
        raise DownloadError(f"Could not write {destination}: {e}") from e


def _download_with_progress(
    url: str,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]],
    timeout: int,
) -> Path:
    """
    Perform download with streaming and progress updates.

    This is an internal function called by download_file().
    """
    logger.debug(f"Downloading from {url}")

    response = requests.get(url, stream=True, timeout=timeout, allow_redirects=True)
    response.raise_for_status()

    content_length = response.headers.get("content-length")
    total_size = int(content_length) if content_length else 0

    downloaded = 0
    start_time = time.time()
    last_progress_time = start_time

    with open(destination, "wb") as f:
        for chunk in response.iter_content(chunk_size=8192):
            if not chunk:
                continue
            f.write(chunk)
            downloaded += len(chunk)

            # Report progress at most once per 0.5 seconds
            current_time = time.time()
            if progress_callback and current_time - last_progress_time >= 0.5:
                progress_callback(
                    _progress(downloaded, total_size, current_time - start_time)
                )
                last_progress_time = current_time

    if progress_callback:
        progress_callback(_progress(downloaded, total_size, time.time() - start_time))

    logger.debug(f"Download complete: {destination}")
    return destination


def _progress(downloaded: int, total_size: int, elapsed: float) -> DownloadProgress:
    speed = downloaded / elapsed if elapsed > 0 else 0
    remaining = total_size - downloaded if total_size > 0 else 0
    eta = remaining / speed if speed > 0 else 0

    return DownloadProgress(
        bytes_downloaded=downloaded,
        total_bytes=total_size if total_size > 0 else downloaded,
        percentage=(downloaded / total_size * 100) if total_size > 0 else 0,
        speed_bps=speed,
        eta_seconds=eta,
    )


def fetch_artifact(
    url: str,
    file_name: str,
    destination: Union[str, Path],
    unpack: bool,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
) -> Path:
    """
    Download an artifact into a directory, optionally unpacking it in place.

    Args:
        url: URL of the artifact
        file_name: Local file name of the downloaded archive
        destination: Directory receiving the archive or its contents
        unpack: If True, extract the archive into destination and remove it
        progress_callback: Optional callback for download progress (default:
            progress lines logged at debug level)

    Returns:
        Path to the destination directory

    Raises:
        DownloadError: If the download fails
        ArchiveExtractionError: If the archive cannot be extracted
    """
    destination = Path(destination)
    archive_path = destination / file_name

    logger.info(f"Downloading {file_name}")
    if progress_callback is None:
        progress_callback = functools.partial(_log_progress, file_name)
    download_file(url, archive_path, progress_callback=progress_callback)

    if unpack:
        logger.debug(f"Extracting {archive_path} to {destination}")
        extract_archive(archive_path, destination)
        archive_path.unlink()

    return destination


def _log_progress(file_name: str, progress: DownloadProgress) -> None:
    logger.debug(f"{file_name}: {progress}")


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Example:
        >>> progress = DownloadProgress(52428800, 104857600, 50.0, 1048576, 50)
        >>> print(format_progress(progress))
        50.0/100.0 MB (50.0%) at 1.0 MB/s ETA: 50s
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.total_bytes > 0:
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s "
            f"ETA: {progress.eta_seconds:.0f}s"
        )
    else:
        return f"{mb_downloaded:.1f} MB at {speed_mbps:.1f} MB/s"
