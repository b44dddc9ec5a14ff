import json


#---------------------------------------------------------------------------#
#   Exceptions                                                              #
#       PixivError                                                          #
#        +-- InvalidState       local precondition, never hits network.    #
#        +-- HttpFailure        any non-2xx response.                      #
#        |    +-- AuthenticationFailed      401                             #
#        |    +-- MalformedRequest          400                             #
#        +-- NoMoreResults      pagination exhausted.                       #
#        +-- ParseFailure       body is not the expected JSON.             #
#---------------------------------------------------------------------------#


class PixivError(Exception):
    """Base exception of pxvapi."""
    pass


class InvalidState(PixivError):
    """A local precondition is violated, e.g. auth required without token."""
    pass


class NoMoreResults(PixivError):
    """`fetch_next` is called on the final page."""
    pass


class ParseFailure(PixivError):
    """
    Response body is not valid JSON or lacks an expected field.

    The undecodable text is kept in `body`.
    """

    def __init__(self, message, body=None):
        super().__init__(message)
        self.body = body


class HttpFailure(PixivError):
    """
    Upstream answered with a non-2xx status.

    The raw `aiohttp.ClientResponse` is kept in `response`, its body is
    already read and kept in `body` since the connection is released
    before the exception reaches the caller.
    """

    def __init__(self, status, response=None, body=""):
        self.status = status
        self.response = response
        self.body = body
        if response is not None:
            self.reason = response.reason
            self.url = str(response.url)
            self.headers = response.headers
        else:
            self.reason = None
            self.url = None
            self.headers = {}
        super().__init__(self._describe())

    def _describe(self):
        msg = f"HTTP {self.status}"
        if self.reason:
            msg += f" {self.reason}"
        if self.url:
            msg += f" ({self.url})"
        detail = self.message
        if detail:
            msg += f": {detail}"
        return msg

    def payload(self):
        """
        Decode the upstream error body.

        Returns:
            deserialized JSON, or None if the body is not JSON.
        """
        try:
            return json.loads(self.body)
        except (TypeError, ValueError):
            return None

    @property
    def message(self):
        """Human readable message pixiv put in the error body, if any."""
        data = self.payload()
        if not isinstance(data, dict):
            return None
        #   App API: {"error": {"user_message": "", "message": "", ...}}
        #   OAuth: {"has_error": true, "errors": {"system": {"message": ""}}}
        err = data.get("error")
        if isinstance(err, dict):
            return err.get("user_message") or err.get("message") or None
        errors = data.get("errors")
        if isinstance(errors, dict):
            system = errors.get("system")
            if isinstance(system, dict):
                return system.get("message") or None
        return None


class AuthenticationFailed(HttpFailure):
    """HTTP 401, the access token is missing, expired or revoked."""
    pass


class MalformedRequest(HttpFailure):
    """HTTP 400, the upstream rejected the parameters."""
    pass
