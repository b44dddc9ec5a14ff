#---------------------------------------------------------------------------#
#   pxvapi                                                                  #
#       Asynchronous client of the pixiv app API.                           #
#       Signed requests, bearer tokens, next_url paging.                    #
#---------------------------------------------------------------------------#

from .client import FileClient, PixivClient, ResourceClient
from .config import ClientConfig
from .endpoints import RESOURCES, Endpoint, Param, build_parameters
from .errors import (
    AuthenticationFailed,
    HttpFailure,
    InvalidState,
    MalformedRequest,
    NoMoreResults,
    ParseFailure,
    PixivError,
)
from .log import disable_logging, enable_logging, pxlog
from .models import ClientCredentials, OutgoingRequest, Session
from .paging import Paginated
from .signing import compose_headers, sign
from .transport import Transport

__version__ = "0.1.0"
__all__ = [
    "PixivClient",
    "ResourceClient",
    "FileClient",
    "ClientConfig",
    "RESOURCES",
    "Endpoint",
    "Param",
    "build_parameters",
    "PixivError",
    "InvalidState",
    "HttpFailure",
    "AuthenticationFailed",
    "MalformedRequest",
    "NoMoreResults",
    "ParseFailure",
    "enable_logging",
    "disable_logging",
    "pxlog",
    "ClientCredentials",
    "OutgoingRequest",
    "Session",
    "Paginated",
    "compose_headers",
    "sign",
    "Transport",
]
