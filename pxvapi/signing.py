import datetime
import hashlib

import pytz

from .config import (
    HEADER_AUTHORIZATION,
    HEADER_CLIENT_HASH,
    HEADER_CLIENT_TIME,
)
from .errors import InvalidState


#---------------------------------------------------------------------------#
#   X-Client-Hash signing                                                   #
#       hash = md5(client_time + client_hash), lowercase hex.               #
#       MD5 is what the app API checks against, it is not a choice made    #
#   here.                                                                   #
#---------------------------------------------------------------------------#


def sign(timestamp, secret):
    """
    Compute the X-Client-Hash value.

    Args:
        timestamp   string
            The X-Client-Time value sent along.
        secret      string
            The client hash of the credentials.

    Returns:
        string of 32 lowercase hex digits.

    Raises:
        None
    """
    digest = hashlib.md5(f"{timestamp}{secret}".encode("utf-8"))
    return digest.hexdigest()

def format_client_time(now, timezone=None):
    """
    Render `now` as "YYYY-MM-DDTHH:MM:SS+hh:mm".

    A naive `now` is taken as local time. If `timezone` (a pytz name) is
    given, the time is converted to that zone first.
    """
    if now.tzinfo is None:
        now = now.astimezone()
    if timezone:
        now = now.astimezone(pytz.timezone(timezone))
    return now.replace(microsecond=0).isoformat()

def local_now():
    return datetime.datetime.now().astimezone()

def compose_headers(request, session, credentials, now, timezone=None):
    """
    Build the per-request headers.

    Args:
        request     `OutgoingRequest`
        session     `Session`
        credentials `ClientCredentials`
        now         datetime
            Time used for X-Client-Time, injected so signatures can be
            reproduced.
        timezone    string
            Optional pytz zone name for X-Client-Time.

    Returns:
        dict of header name to value.

    Raises:
        InvalidState
            `request.requires_auth` is set while the session has no access
            token. Raised before anything is sent.
    """
    headers = dict()
    if credentials.client_hash and credentials.client_hash.strip():
        client_time = format_client_time(now, timezone)
        headers[HEADER_CLIENT_TIME] = client_time
        headers[HEADER_CLIENT_HASH] = sign(
            client_time, credentials.client_hash
        )

    if request.requires_auth and not session.is_authenticated:
        raise InvalidState(
            f"{request.method} {request.url} requires authentication, "
            "login first"
        )
    #   Attached whenever present, optional-auth endpoints answer
    #   differently for logged in users.
    if session.is_authenticated:
        headers[HEADER_AUTHORIZATION] = f"Bearer {session.access_token}"
    return headers
