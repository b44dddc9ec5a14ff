from collections import namedtuple

from .errors import InvalidState


#---------------------------------------------------------------------------#
#   Request side data                                                       #
#---------------------------------------------------------------------------#


_credentials_fields = [
    "client_id",        #   str
    "client_secret",    #   str
    "client_hash",      #   str *blank disables X-Client-Hash signing.
]
ClientCredentials = namedtuple(
    "ClientCredentials", _credentials_fields, defaults=[""]
)

_request_fields = [
    "url",              #   str *absolute.
    "method",           #   str *"GET" or "POST".
    "parameters",       #   list of (key, value), order preserved.
    "requires_auth",    #   bool
]
OutgoingRequest = namedtuple(
    "OutgoingRequest", _request_fields, defaults=[(), False]
)

Tokens = namedtuple("Tokens", ["access_token", "refresh_token"])
_NO_TOKENS = Tokens(None, None)


#---------------------------------------------------------------------------#
#   Session                                                                 #
#---------------------------------------------------------------------------#


class Session:
    """
    Token holder of a client.

    Only the authenticator writes to it, through `update` and `clear`.
    Both tokens live in one `Tokens` tuple replaced in a single assignment,
    so a reader never sees an access token paired with a stale refresh
    token.
    """

    def __init__(self, access_token=None, refresh_token=None):
        self._tokens = _NO_TOKENS
        if access_token or refresh_token:
            self.update(access_token, refresh_token)

    def __repr__(self):
        state = "authenticated" if self.is_authenticated else "anonymous"
        return f"<Session {state}>"

    @property
    def tokens(self):
        return self._tokens

    @property
    def access_token(self):
        return self._tokens.access_token

    @property
    def refresh_token(self):
        return self._tokens.refresh_token

    @property
    def is_authenticated(self) -> bool:
        return _is_filled(self._tokens.access_token)

    def update(self, access_token, refresh_token=None):
        """
        Replace both tokens.

        Raises:
            InvalidState
                `access_token` is empty, a session holding only a refresh
                token is not allowed.
        """
        if not _is_filled(access_token):
            raise InvalidState("access token must not be empty")
        self._tokens = Tokens(access_token, refresh_token or None)

    def clear(self):
        self._tokens = _NO_TOKENS


def _is_filled(s) -> bool:
    return bool(s and s.strip())
