"""
Network scalars: IP addresses, TCP ports and URLs.
"""

from __future__ import annotations

import ipaddress
from typing import Any, Mapping
from urllib.parse import SplitResult, urlsplit

from hypothesis import strategies as st

from ..custom import custom
from ..errors import TypeDefinitionError
from ..decoder import decode_without_validation
from ..model import CustomType, number, string
from ..result import Result, fail, succeed

MIN_PORT_NUMBER = 1
MAX_PORT_NUMBER = 65535

URL_SCHEMES = ("http", "https", "ftp", "ws", "wss")


def _decode_string(value: Any, decode_options: Any, _options: Mapping[str, Any]) -> Result[str]:
    return decode_without_validation(string(), value, decode_options)


def _validate_ip(value: Any, _validation_options: Any, options: Mapping[str, Any]) -> Result[bool]:
    if not isinstance(value, str):
        return fail("expected a string", value)
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return fail("Invalid IP address", value)
    if options.get("version") is not None and address.version != options["version"]:
        return fail(f"Invalid IP address (expected IPv{options['version']})", value)
    return succeed(True)


def ip(version: int | None = None, **options: Any) -> CustomType:
    """
    An IPv4 or IPv6 address kept as its textual form.

    Pass version=4 or version=6 to accept only one family.
    """
    if version not in (None, 4, 6):
        raise TypeDefinitionError(f"IP version must be 4 or 6, got {version!r}")
    return custom(
        "ip",
        lambda value, _encode_options, _options: value,
        _decode_string,
        _validate_ip,
        lambda _max_depth, opts: st.ip_addresses(v=opts.get("version")).map(str),
        {"version": version},
        **options,
    )


def _decode_port(value: Any, decode_options: Any, _options: Mapping[str, Any]) -> Result[int]:
    def integral(decoded: int | float) -> Result[int]:
        if isinstance(decoded, float) and not decoded.is_integer():
            return fail("Expected a TCP port number", value)
        return succeed(int(decoded))

    return decode_without_validation(number(), value, decode_options).chain(integral)


def _validate_port(value: Any, _validation_options: Any, _options: Mapping[str, Any]) -> Result[bool]:
    if not isinstance(value, int) or isinstance(value, bool):
        return fail("Expected a TCP port number", value)
    if value < MIN_PORT_NUMBER or value > MAX_PORT_NUMBER:
        return fail(
            f"Invalid TCP port number (must be between {MIN_PORT_NUMBER} and {MAX_PORT_NUMBER})",
            value,
        )
    return succeed(True)


def port(**options: Any) -> CustomType:
    return custom(
        "port",
        lambda value, _encode_options, _options: value,
        _decode_port,
        _validate_port,
        lambda _max_depth, _options: st.integers(min_value=MIN_PORT_NUMBER, max_value=MAX_PORT_NUMBER),
        **options,
    )


def _decode_url(value: Any, decode_options: Any, _options: Mapping[str, Any]) -> Result[SplitResult]:
    def parse(text: str) -> Result[SplitResult]:
        try:
            parsed = urlsplit(text)
        except ValueError:
            return fail("Invalid URL format (RFC 3986)", value)
        if not parsed.scheme or not parsed.netloc:
            return fail("Invalid URL format (RFC 3986)", value)
        return succeed(parsed)

    if isinstance(value, SplitResult):
        return succeed(value)
    return decode_without_validation(string(), value, decode_options).chain(parse)


def _validate_url(value: Any, _validation_options: Any, _options: Mapping[str, Any]) -> Result[bool]:
    if not isinstance(value, SplitResult) or not value.scheme or not value.netloc:
        return fail("Invalid URL format (RFC 3986)", value)
    return succeed(True)


def url(**options: Any) -> CustomType:
    """
    An absolute URL, decoded into a `urllib.parse.SplitResult`.

    Usage:
        decode(url(), "https://example.com/a?b=1").unwrap().netloc  # "example.com"
    """
    return custom(
        "url",
        lambda value, _encode_options, _options: value.geturl(),
        _decode_url,
        _validate_url,
        lambda _max_depth, _options: st.builds(
            lambda scheme, host, path: urlsplit(f"{scheme}://{host}{path}"),
            st.sampled_from(URL_SCHEMES),
            st.from_regex(r"[a-z][a-z0-9]{0,10}\.(com|org|net|io)", fullmatch=True),
            st.from_regex(r"(/[a-z0-9]{1,8}){0,3}", fullmatch=True),
        ),
        **options,
    )
