import json
import weakref

from .errors import InvalidState, NoMoreResults, ParseFailure
from .log import pxlog


_log = pxlog.getChild("paging")

NEXT_URL_KEY = "next_url"


#---------------------------------------------------------------------------#
#   Paginated responses                                                     #
#       A page keeps a weak reference to the client that fetched it. The    #
#   next page is a plain GET on "next_url", which already holds every      #
#   query parameter (offset, max_bookmark_id, ...).                         #
#---------------------------------------------------------------------------#


class Paginated:
    """
    One page of a list endpoint.

    Attributes:
        items           list
            Decoded JSON objects under `items_key`.
        next_url        string
            Absolute URL of the next page, None on the final page.
        raw             dict
            The whole decoded response (e.g. "ranking_novels",
            "search_span_limit" live here).
        items_key       string
        requires_auth   bool
            Auth requirement of the request this page came from, reused for
            the following pages.
    """

    def __init__(self, items, next_url, raw, items_key, client=None,
                 requires_auth=False):
        self.items = items
        self.next_url = next_url or None
        self.raw = raw
        self.items_key = items_key
        self.requires_auth = requires_auth
        self._client_ref = weakref.ref(client) if client is not None else None

    @classmethod
    def from_response(cls, data, items_key, client=None, requires_auth=False):
        """
        Wrap a decoded response.

        Raises:
            ParseFailure
                `items_key` is missing or does not hold a list.
        """
        items = data.get(items_key)
        if not isinstance(items, list):
            raise ParseFailure(
                f"expected a list under {items_key!r}", json.dumps(data)
            )
        return cls(
            items, data.get(NEXT_URL_KEY), data, items_key, client,
            requires_auth
        )

    def __repr__(self):
        return "<Paginated {key}: {n} items, next={nxt}>".format(
            key=self.items_key, n=len(self.items), nxt=self.next_url
        )

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def has_next(self) -> bool:
        return self.next_url is not None

    @property
    def client(self):
        """The bound client, None if unbound or already collected."""
        if self._client_ref is None:
            return None
        return self._client_ref()

    async def fetch_next(self):
        """
        Fetch the page after this one.

        Returns:
            `Paginated` of the same items key.

        Raises:
            NoMoreResults
                This is the final page.
            InvalidState
                No client is bound, or it has been garbage collected.
            Anything `Transport.get` raises.
        """
        if self.next_url is None:
            raise NoMoreResults(f"no page after this {self.items_key} page")
        client = self.client
        if client is None:
            raise InvalidState("the client of this page is gone")
        _log.debug(f"Following {self.next_url}")
        data = await client.transport.get(
            self.next_url, requires_auth=self.requires_auth
        )
        return Paginated.from_response(
            data, self.items_key, client, self.requires_auth
        )

    async def pages(self, limit=None):
        """
        Iterate this page and the following ones.

        Args:
            limit       int
                Maximum number of pages to yield, None for all.
        """
        page = self
        count = 0
        while True:
            yield page
            count += 1
            if not page.has_next or (limit is not None and count >= limit):
                return
            page = await page.fetch_next()

    async def __aiter__(self):
        #   Items across every remaining page.
        async for page in self.pages():
            for item in page.items:
                yield item
