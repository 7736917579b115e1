"""
Network download of release archives.

Streams an HTTP(S) response body into a local file in fixed-size chunks.
Transport errors are retried with exponential backoff; a non-success status
is reported immediately since retrying will not change the answer.
"""

import logging
import time
from pathlib import Path

import requests
from requests.exceptions import ConnectionError, RequestException, Timeout

from .exceptions import DownloadError, InstallError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192

DEFAULT_TIMEOUT = 30


def download_file(
    url: str,
    destination: Path,
    timeout: int = DEFAULT_TIMEOUT,
    max_retries: int = 3,
) -> Path:
    """
    Download file from URL to destination.

    The destination is truncated before writing; partial content is left on
    disk if the download fails.

    Args:
        url: URL to download from
        destination: Local path to save file
        timeout: Request timeout in seconds
        max_retries: Maximum number of attempts for transport errors

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If the server answers with a non-success status or the
            transfer fails after retries
        InstallError: If writing the destination file fails
        ValueError: If URL or destination is invalid

    Example:
        >>> from webtoolkit.core.download import download_file
        >>> download_file("https://example.com/tool.tar.gz", Path("cache/tool.tmp"))
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)

    for attempt in range(max_retries):
        try:
            return _download(url, destination, timeout)
        except (Timeout, ConnectionError) as e:
            if attempt == max_retries - 1:
                raise DownloadError(
                    f"error sending HTTP request to {url} "
                    f"(failed after {max_retries} attempts): {e}"
                ) from e

            # Exponential backoff
            backoff_seconds = 2**attempt
            logger.warning(
                f"Download attempt {attempt + 1} failed: {e}. "
                f"Retrying in {backoff_seconds}s..."
            )
            time.sleep(backoff_seconds)
        except RequestException as e:
            raise DownloadError(f"error downloading {url}: {e}") from e

    raise DownloadError(f"error downloading {url}: no attempts were made")


def _download(url: str, destination: Path, timeout: int) -> Path:
    """
    Perform one streaming download attempt.

    Raises:
        DownloadError: If the response status is not 2xx
        InstallError: If the destination cannot be written
        RequestException: If the transfer fails
    """
    logger.debug(f"Downloading from {url}")

    with requests.get(
        url, stream=True, timeout=timeout, allow_redirects=True
    ) as response:
        if not 200 <= response.status_code < 300:
            raise DownloadError(
                f"error downloading archive file: {response.status_code} "
                f"{response.reason}\n{url}"
            )

        try:
            f = open(destination, "wb")
        except OSError as e:
            raise InstallError(
                f"failed creating temporary output file {destination}: {e}"
            ) from e

        downloaded = 0
        with f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if not chunk:
                    continue
                try:
                    f.write(chunk)
                except OSError as e:
                    raise InstallError(
                        f"failed writing download to {destination}: {e}"
                    ) from e
                downloaded += len(chunk)

    logger.debug(f"Download complete: {destination} ({downloaded} bytes)")
    return destination


__all__ = [
    "CHUNK_SIZE",
    "DEFAULT_TIMEOUT",
    "download_file",
]
