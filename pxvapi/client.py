import os

import yarl

from .auth import Authenticator
from .config import (
    ENV_CLIENT_HASH,
    ENV_CLIENT_ID,
    ENV_CLIENT_SECRET,
    ENV_REFRESH_TOKEN,
    ClientConfig,
)
from .endpoints import RESOURCES, build_parameters, find_endpoint
from .errors import InvalidState
from .models import ClientCredentials, Session
from .paging import Paginated
from .transport import Transport


#---------------------------------------------------------------------------#
#   Resource groups                                                         #
#---------------------------------------------------------------------------#


def _bind(client, endpoint):
    async def call(**kwargs):
        return await client.call(endpoint, **kwargs)
    call.__name__ = endpoint.name
    call.__qualname__ = endpoint.name
    call.__doc__ = endpoint.doc
    return call


class ResourceClient:
    """
    Accessors of one group of `RESOURCES`.

    Every endpoint of the group is an attribute, an async function taking
    the endpoint's parameters as keywords:

        page = await client.illust.ranking(mode="week")
    """

    def __init__(self, client, group):
        self._client = client
        self._group = group
        for ep in RESOURCES[group]:
            setattr(self, ep.name, _bind(client, ep))

    def __repr__(self):
        return f"<ResourceClient {self._group}>"

    @property
    def endpoints(self):
        return RESOURCES[self._group]


class FileClient:
    """Downloads of image/ugoira files linked from API responses."""

    def __init__(self, client):
        self._client = client

    def __repr__(self):
        return "<FileClient>"

    async def download(self, url, savedir=".", fname=""):
        """
        Save the file at `url` into `savedir`.

        Args:
            url         string
                e.g. an "image_urls"/"meta_single_page" entry of an illust.
            savedir     string
                Created if missing.
            fname       string
                Defaults to the last path segment of `url`.

        Returns:
            string, full path of the saved file.

        Raises:
            Same as `Transport.download`.
        """
        if not fname:
            fname = yarl.URL(url).name
        if not os.path.exists(savedir):
            os.makedirs(savedir)
        fullname = os.path.join(savedir, fname)
        await self._client.transport.download(url, fullname)
        return fullname


#---------------------------------------------------------------------------#
#   Client                                                                  #
#---------------------------------------------------------------------------#


class PixivClient:
    """
    pixiv app API client.

    Args:
        client_id       string
        client_secret   string
        client_hash     string
            Blank disables X-Client-Time/X-Client-Hash signing.
        config          `ClientConfig`
        session         `Session`
            Pre-filled tokens, a fresh anonymous session by default.
        clock           callable
            Returns the datetime used for X-Client-Time.
        refresh_token   string
            Used by `auth.refresh()` while the session holds none.

    Use as an async context manager, or call `close` when done:

        async with PixivClient(cid, secret, chash) as client:
            await client.auth.refresh(token)
            page = await client.user.recommended()
            async for user in page:
                ...
    """

    def __init__(self, client_id, client_secret, client_hash="", *,
                 config=None, session=None, clock=None, refresh_token=None):
        self.credentials = ClientCredentials(
            client_id, client_secret, client_hash or ""
        )
        self.config = config or ClientConfig()
        self.session = session or Session()
        self.transport = Transport(
            self.credentials, self.session, self.config, clock=clock
        )
        #   Used by auth.refresh() until a login fills the session.
        self.refresh_token = refresh_token or None
        self.auth = Authenticator(self)
        self.file = FileClient(self)
        for group in RESOURCES:
            setattr(self, group, ResourceClient(self, group))

    @classmethod
    def from_env(cls, environ=None, **kwargs):
        """
        Build a client from PIXIV_CLIENT_ID, PIXIV_CLIENT_SECRET,
        PIXIV_CLIENT_HASH. PIXIV_REFRESH_TOKEN, if set, is kept in
        `refresh_token` for a later `auth.refresh()`.

        Raises:
            InvalidState
                Client id or secret is not set.
        """
        environ = os.environ if environ is None else environ
        client_id = environ.get(ENV_CLIENT_ID)
        client_secret = environ.get(ENV_CLIENT_SECRET)
        if not client_id or not client_secret:
            raise InvalidState(
                f"{ENV_CLIENT_ID} and {ENV_CLIENT_SECRET} must be set"
            )
        kwargs.setdefault("refresh_token", environ.get(ENV_REFRESH_TOKEN))
        return cls(
            client_id, client_secret, environ.get(ENV_CLIENT_HASH, ""),
            **kwargs
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        await self.transport.close()

    def url_for(self, endpoint):
        return self.config.base_url.rstrip("/") + endpoint.path

    async def call(self, endpoint, **kwargs):
        """
        Invoke an `Endpoint` of the table.

        Returns:
            `Paginated` if the endpoint declares an items key, the decoded
            JSON object otherwise.

        Raises:
            TypeError, ValueError
                Bad keyword arguments, nothing is sent.
            InvalidState
                Authentication required but not logged in.
            HttpFailure (and subclasses), ParseFailure
        """
        parameters = build_parameters(endpoint, kwargs)
        url = self.url_for(endpoint)
        if endpoint.method == "POST":
            data = await self.transport.post(
                url, parameters, requires_auth=endpoint.requires_auth
            )
        else:
            data = await self.transport.get(
                url, parameters, requires_auth=endpoint.requires_auth
            )
        if endpoint.items_key is None:
            return data
        return Paginated.from_response(
            data, endpoint.items_key, self, endpoint.requires_auth
        )

    async def invoke(self, group, name, **kwargs):
        """Call an endpoint by group and name, e.g. ("novel", "detail")."""
        return await self.call(find_endpoint(group, name), **kwargs)

    async def fetch_next(self, page):
        """Same as `page.fetch_next()`."""
        return await page.fetch_next()
