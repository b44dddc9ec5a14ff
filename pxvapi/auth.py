import json

from .errors import InvalidState, ParseFailure
from .log import pxlog


_log = pxlog.getChild("auth")

GRANT_PASSWORD = "password"
GRANT_REFRESH_TOKEN = "refresh_token"


#---------------------------------------------------------------------------#
#   OAuth                                                                   #
#       POST <auth_url> with the client credentials and a grant, the       #
#   answer carries both tokens under "response". This is the only place    #
#   that writes to the client's `Session`.                                  #
#---------------------------------------------------------------------------#


class Authenticator:
    """Runs the token grants of a client and stores the tokens."""

    def __init__(self, client):
        self._client = client

    async def login(self, username, password):
        """
        Password grant.

        Returns:
            dict, the "response" object of the token endpoint ("user" holds
            the account).

        Raises:
            AuthenticationFailed, MalformedRequest
                Wrong username/password or rejected client credentials.
            ParseFailure
                The answer lacks an access token.
        """
        return await self._grant(
            GRANT_PASSWORD, [("username", username), ("password", password)]
        )

    async def refresh(self, refresh_token=None):
        """
        Refresh-token grant.

        Args:
            refresh_token   string
                Defaults to the refresh token of the current session.

        Raises:
            InvalidState
                No refresh token given and none stored.
            Same as `login` otherwise.
        """
        refresh_token = refresh_token \
            or self._client.session.refresh_token \
                or self._client.refresh_token
        if not refresh_token:
            raise InvalidState("no refresh token to refresh with")
        return await self._grant(
            GRANT_REFRESH_TOKEN, [("refresh_token", refresh_token)]
        )

    def logout(self):
        """Forget both tokens, no request is sent."""
        self._client.session.clear()
        _log.info("Session cleared")

    async def _grant(self, grant_type, grant_params):
        client = self._client
        creds = client.credentials
        parameters = [
            ("get_secure_url", True),
            ("client_id", creds.client_id),
            ("client_secret", creds.client_secret),
            ("grant_type", grant_type),
        ]
        parameters.extend(grant_params)
        parameters.append(("include_policy", True))

        _log.debug(f"Requesting token, grant {grant_type}")
        data = await client.transport.post(
            client.config.auth_url, parameters, requires_auth=False
        )
        body = data.get("response", data)
        if not isinstance(body, dict) or not body.get("access_token"):
            raise ParseFailure(
                "token response has no access_token", json.dumps(data)
            )

        client.session.update(
            body["access_token"],
            body.get("refresh_token") or client.session.refresh_token
        )
        user = body.get("user") or {}
        _log.info("Logged in as {}".format(user.get("account", "<unknown>")))
        return body
