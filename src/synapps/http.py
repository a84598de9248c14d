"""HTTP header and method names."""

from enum import Enum


class Header(str, Enum):
    """HTTP header names."""

    # General headers
    CONTENT_TYPE = "Content-Type"

    # Request headers
    ACCEPT = "Accept"
    ACCEPT_ENCODING = "Accept-Encoding"
    ACCEPT_LANGUAGE = "Accept-Language"
    AUTHORIZATION = "Authorization"

    # Response headers
    LOCATION = "Location"
    WWW_AUTHENTICATE = "WWW-Authenticate"
    STATUS = "Status"


class Method(str, Enum):
    """HTTP methods."""

    CONNECT = "CONNECT"
    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"
    TRACE = "TRACE"
