from collections import namedtuple


#---------------------------------------------------------------------------#
#   Constants                                                               #
#---------------------------------------------------------------------------#

APP_API_URL = "https://app-api.pixiv.net"
OAUTH_URL = "https://oauth.secure.pixiv.net/auth/token"
#   Image host refuses downloads without this referer.
DOWNLOAD_REFERER = "https://app-api.pixiv.net/"

#   The app API only answers clients that look like the iOS app.
APP_VERSION = "7.7.7"
OS_VERSION = "13.1.3"
DEVICE = "iPhone11,2"

HEADER_APP_OS = "App-OS"
HEADER_APP_OS_VERSION = "App-OS-Version"
HEADER_APP_VERSION = "App-Version"
HEADER_USER_AGENT = "User-Agent"
HEADER_CLIENT_TIME = "X-Client-Time"
HEADER_CLIENT_HASH = "X-Client-Hash"
HEADER_AUTHORIZATION = "Authorization"
HEADER_REFERER = "Referer"

ENV_CLIENT_ID = "PIXIV_CLIENT_ID"
ENV_CLIENT_SECRET = "PIXIV_CLIENT_SECRET"
ENV_CLIENT_HASH = "PIXIV_CLIENT_HASH"
ENV_REFRESH_TOKEN = "PIXIV_REFRESH_TOKEN"


#---------------------------------------------------------------------------#
#   Client configuration                                                    #
#---------------------------------------------------------------------------#


_config_fields = [
    "app_version",      #   str
    "os_version",       #   str
    "device",           #   str *model string in User-Agent.
    "base_url",         #   str *prefix of endpoint paths.
    "auth_url",         #   str *OAuth token endpoint.
    "timeout",          #   float or None *total seconds per request.
    "timezone",         #   str or None *pytz name, None for local time.
]
ClientConfig = namedtuple(
    "ClientConfig", _config_fields,
    defaults=[APP_VERSION, OS_VERSION, DEVICE, APP_API_URL, OAUTH_URL,
              None, None]
)


def make_device_headers(config):
    """Fixed headers sent with every request of a client."""
    user_agent = "PixivIOSApp/{app} (iOS {os}; {device})".format(
        app=config.app_version, os=config.os_version, device=config.device
    )
    return {
        HEADER_APP_OS: "ios",
        HEADER_APP_OS_VERSION: config.os_version,
        HEADER_APP_VERSION: config.app_version,
        HEADER_USER_AGENT: user_agent,
    }
