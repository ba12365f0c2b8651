"""Download the bootstrap package"""

import logging
from pathlib import Path
from typing import Optional

import httpx

from .errors import FetchError

logger = logging.getLogger(__name__)


class BootstrapFetcher:
    """Fetch a file over HTTP(S) to a local path"""

    def __init__(
        self,
        timeout: float = 60.0,
        verify: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.timeout = timeout
        self.verify = verify
        self.transport = transport

    def fetch(self, url: str, dest: Path) -> None:
        """Stream ``url`` into ``dest``; raises FetchError on any failure.

        A partially written ``dest`` is left behind for the caller to remove.
        """
        logger.debug("Fetching %s -> %s", url, dest)

        try:
            with httpx.Client(
                timeout=self.timeout,
                verify=self.verify,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                with client.stream("GET", url) as response:
                    if response.status_code >= 400:
                        raise FetchError(f"HTTP {response.status_code} fetching {url}")

                    with open(dest, "wb") as f:
                        for chunk in response.iter_bytes():
                            f.write(chunk)
        except httpx.HTTPError as e:
            raise FetchError(f"Error fetching {url}: {e}") from e
        except OSError as e:
            raise FetchError(f"Error writing {dest}: {e}") from e

        logger.debug("Fetched %s", url)
