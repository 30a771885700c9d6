"""Authority service client satisfying AuthorityClientProtocol.

Resolves (domain, username) identities to access tokens with one GET to
``{base_url}/UserACLs``. The response is plain text, one entry per line:
``TOKEN:<value>`` lines are access tokens, anything else is a status line
about the authorities behind the service and is only logged.
"""

import codecs
import re
from typing import AsyncIterator, List, Mapping, Optional, Tuple
from urllib.parse import urlencode

import httpx

from docacl.core.logging import ContextualLogger
from docacl.core.logging import logger as default_logger
from docacl.domains.authority.exceptions import (
    ConfigurationError,
    ResolutionError,
    TransportError,
)
from docacl.domains.authority.pool import AuthorityConnectionPool

USER_ACLS_PATH = "/UserACLs"
TOKEN_PREFIX = "TOKEN:"
DEFAULT_CHARSET = "utf-8"

# Only CR, LF and CRLF end a line. Other Unicode line separators belong to the token.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def build_query(identities: Mapping[str, str]) -> str:
    """Encode identities as the UserACLs query string.

    A lone identity without a domain uses the plain ``username=`` form;
    anything else is sent as ``username_i``/``domain_i`` pairs in mapping
    order.
    """
    if len(identities) == 1 and "" in identities:
        return urlencode([("username", identities[""])], encoding="utf-8")

    pairs = []
    for i, (domain, username) in enumerate(identities.items()):
        pairs.append((f"username_{i}", username))
        pairs.append((f"domain_{i}", domain))
    return urlencode(pairs, encoding="utf-8")


def resolve_charset(response: httpx.Response) -> str:
    """Charset declared by the response, falling back to UTF-8."""
    charset = response.charset_encoding
    if not charset:
        return DEFAULT_CHARSET
    try:
        return codecs.lookup(charset).name
    except LookupError:
        return DEFAULT_CHARSET


def split_lines(buffer: str) -> Tuple[List[str], str]:
    """Split off the complete lines of a buffer.

    Returns the complete lines and the unterminated remainder. A trailing
    CR stays in the remainder since it may be the first half of a CRLF.
    """
    lines: List[str] = []
    pos = 0
    while True:
        match = _LINE_BREAK.search(buffer, pos)
        if match is None or (match.group() == "\r" and match.end() == len(buffer)):
            break
        lines.append(buffer[pos : match.start()])
        pos = match.end()
    return lines, buffer[pos:]


async def read_lines(response: httpx.Response) -> AsyncIterator[str]:
    """Decoded lines of a streamed response, split on CR, LF or CRLF only."""
    buffer = ""
    async for chunk in response.aiter_text():
        lines, buffer = split_lines(buffer + chunk)
        for line in lines:
            yield line
    if buffer:
        yield buffer[:-1] if buffer.endswith("\r") else buffer


class AuthorityClient:
    """Client for the authority service's UserACLs lookup.

    Safe for concurrent use: each call issues an independent request on the
    shared pool and holds no state of its own.
    """

    def __init__(
        self,
        *,
        pool: AuthorityConnectionPool,
        base_url: Optional[str],
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the client.

        Args:
            pool: Shared connection pool (owned by the caller)
            base_url: Authority service base URL, e.g.
                ``http://localhost:8345/mcf-authority-service``
            logger: Optional logger
        """
        self._pool = pool
        self._base_url = base_url
        self._logger = logger or default_logger

    def build_request_url(self, identities: Mapping[str, str]) -> str:
        """Full lookup URL for the given identities.

        Raises:
            ConfigurationError: If no base URL is configured.
        """
        if not self._base_url:
            raise ConfigurationError(
                "Authority service base URL is required to resolve user access tokens "
                "(set AUTHORITY_SERVICE_BASE_URL)"
            )
        url = f"{self._base_url}{USER_ACLS_PATH}"
        if not identities:
            return url
        return f"{url}?{build_query(identities)}"

    async def resolve_tokens(self, identities: Mapping[str, str]) -> List[str]:
        """Fetch the access tokens for the given identities.

        Raises:
            ConfigurationError: If no base URL is configured or the pool is closed.
            TransportError: On connection failure, timeout or redirect loop.
            ResolutionError: On any non-2xx response.
        """
        url = self.build_request_url(identities)
        client = self._pool.client
        self._logger.debug(f"[AuthorityClient] GET {url}")

        try:
            # Leaving the stream context releases the connection on every path.
            async with client.stream("GET", url) as response:
                if not response.is_success:
                    body = (await response.aread()).decode(DEFAULT_CHARSET, errors="replace")
                    raise ResolutionError(response.status_code, body)

                response.encoding = resolve_charset(response)
                tokens: List[str] = []
                async for line in read_lines(response):
                    if line.startswith(TOKEN_PREFIX):
                        tokens.append(line[len(TOKEN_PREFIX) :])
                    else:
                        self._logger.info(f"[AuthorityClient] Saw authority response {line}")
                return tokens
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Timed out communicating with authority service: {e}"
            ) from e
        except httpx.RequestError as e:
            raise TransportError(
                f"IO exception communicating with authority service: {e}"
            ) from e
