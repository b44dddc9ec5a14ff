import asyncio
import json
import os
from urllib.parse import quote

import aiohttp
import yarl

from .config import DOWNLOAD_REFERER, HEADER_REFERER, make_device_headers
from .errors import (
    AuthenticationFailed,
    HttpFailure,
    MalformedRequest,
    ParseFailure,
)
from .log import pxlog
from .models import OutgoingRequest
from .signing import compose_headers, local_now


_log = pxlog.getChild("transport")


#---------------------------------------------------------------------------#
#   Helpers                                                                 #
#---------------------------------------------------------------------------#


def stringify(value):
    """Render a parameter value, booleans as lowercase "true"/"false"."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

def make_query_url(url, parameters):
    """
    Append `parameters` to `url` as a query string.

    Keys and values are percent-encoded, "[]" of array keys ("tags[]")
    stays literal.
    """
    if not parameters:
        return url
    query = "&".join(
        "{}={}".format(quote(str(k), safe="[]"), quote(stringify(v), safe=""))
        for k, v in parameters
    )
    sep = "&" if "?" in url else "?"
    return url + sep + query

def make_form(parameters):
    form = aiohttp.FormData()
    for k, v in parameters or ():
        form.add_field(k, stringify(v))
    return form

async def write_stream(resp, fpath, chunk_size=4096):
    n = 0
    reader = resp.content
    with open(fpath, "wb") as f:
        async for chunk in reader.iter_chunked(chunk_size):
            n += f.write(chunk)
    return n

def check_response(response, body=""):
    """
    Raise on a non-2xx response.

    Args:
        response    `aiohttp.ClientResponse`
        body        string
            Already read body, kept in the raised exception.

    Raises:
        AuthenticationFailed    on 401
        MalformedRequest        on 400
        HttpFailure             on any other non-2xx status
    """
    status = response.status
    if 200 <= status < 300:
        return
    if status == 401:
        raise AuthenticationFailed(status, response, body)
    if status == 400:
        raise MalformedRequest(status, response, body)
    raise HttpFailure(status, response, body)

def parse_json(body):
    """Decode a response body into a JSON object (dict)."""
    try:
        data = json.loads(body)
    except ValueError as err:
        raise ParseFailure(f"response is not valid JSON: {err}", body) from err
    if not isinstance(data, dict):
        raise ParseFailure(
            f"expected a JSON object, got {type(data).__name__}", body
        )
    return data


#---------------------------------------------------------------------------#
#   Transport                                                               #
#---------------------------------------------------------------------------#


class Transport:
    """
    Signed HTTP exchange over one shared `aiohttp.ClientSession`.

    The HTTP session is created on first use, inside the running event
    loop, and reused until `close`. It carries the device headers of one
    set of credentials: do not share a transport between clients.
    """

    def __init__(self, credentials, session, config, *, clock=None):
        self.credentials = credentials
        self.session = session
        self.config = config
        #   Injectable for reproducible X-Client-Time.
        self.clock = clock or local_now
        self._http = None

    @property
    def closed(self) -> bool:
        return self._http is None or self._http.closed

    def _ensure_http(self):
        if self.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout) \
                if self.config.timeout is not None else \
                    None
            kwargs = {"headers": make_device_headers(self.config)}
            if timeout is not None:
                kwargs["timeout"] = timeout
            self._http = aiohttp.ClientSession(**kwargs)
        return self._http

    async def close(self):
        if self._http is not None and not self._http.closed:
            await self._http.close()
        self._http = None

    async def get(self, url, parameters=None, *, requires_auth=False):
        """
        Signed GET, returns the decoded JSON object.

        Args:
            url             string
                Absolute URL, may already carry a query (e.g. a next_url).
            parameters      list of (key, value)
                Appended as query string.
            requires_auth   bool
                Fail locally when no access token is present.

        Raises:
            InvalidState, HttpFailure (and subclasses), ParseFailure
        """
        parameters = list(parameters or ())
        req = OutgoingRequest(
            make_query_url(url, parameters), "GET", parameters, requires_auth
        )
        return await self._exchange(req)

    async def post(self, url, parameters=None, *, requires_auth=False):
        """Signed form-encoded POST, returns the decoded JSON object."""
        req = OutgoingRequest(
            url, "POST", list(parameters or ()), requires_auth
        )
        return await self._exchange(req, data=make_form(req.parameters))

    async def _exchange(self, req, data=None):
        headers = compose_headers(
            req, self.session, self.credentials, self.clock(),
            self.config.timezone
        )
        http = self._ensure_http()
        #   URL is already percent-encoded, send it untouched.
        target = yarl.URL(req.url, encoded=True)
        async with http.request(
                req.method, target, headers=headers, data=data
            ) as resp:
            body = await resp.text(errors="replace")
            _log.debug(f"{req.method} {req.url} -> {resp.status}")
            check_response(resp, body)
        return parse_json(body)

    async def download(self, url, fullname, *, referer=DOWNLOAD_REFERER,
                       chunk_size=4096):
        """
        Stream a file (i.pximg.net image, ugoira zip) to disk.

        The image host checks only the Referer, no signature or bearer token
        is sent.

        Args:
            url         string
                Absolute URL of the file.
            fullname    string
                Destination path, overwritten if it exists.
            referer     string
            chunk_size  int

        Returns:
            int, bytes written.

        Raises:
            HttpFailure (and subclasses)
                Non-2xx status, nothing is written.
            aiohttp.ClientError, asyncio.TimeoutError
                Transfer broke off, the incomplete file is removed.
        """
        http = self._ensure_http()
        target = yarl.URL(url, encoded=True)
        try:
            async with http.get(
                    target, headers={HEADER_REFERER: referer}
                ) as resp:
                _log.debug(f"GET {url} -> {resp.status}")
                if not 200 <= resp.status < 300:
                    body = await resp.text(errors="replace")
                    check_response(resp, body)
                size = await write_stream(resp, fullname, chunk_size)
        except (aiohttp.ClientError, asyncio.TimeoutError):
            if os.path.exists(fullname):
                #   Clean up possible incomplete file.
                os.remove(fullname)
            raise
        return size
