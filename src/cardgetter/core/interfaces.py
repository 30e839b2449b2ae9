from abc import ABC, abstractmethod
from typing import Dict, Optional

import requests


class BaseFetcher(ABC):
    """
    Contract for the HTTP transport used by the robots.txt check and the
    primary fetch.

    The scraper only depends on this interface, so tests can inject a fake
    transport that never touches the network.
    """

    user_agent: str

    @abstractmethod
    def get(
        self, url: str, headers: Optional[Dict[str, str]] = None, **kwargs
    ) -> requests.Response:
        """
        Issue a GET with the transport's user agent, timeout and retry policy.
        Connection-level failures raise `requests.RequestException`; HTTP
        error statuses are returned, not raised.
        """
        pass

    def close(self) -> None:
        """Release pooled connections. Transports without a pool keep the default."""
