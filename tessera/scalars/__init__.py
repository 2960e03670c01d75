"""
Ready-made scalar types, all built from `custom` and `from_pattern`.

Usage:
    from tessera import scalars

    contact = obj({"email": scalars.email(), "phone": optional(scalars.phone_number())})
"""

from .generic import json, never, unknown, void
from .geo import latitude, longitude
from .network import ip, port, url
from .numeric import decimal
from .temporal import date, datetime_, time, timestamp, timezone
from .text import (
    country_code,
    email,
    isbn,
    jwt,
    locale,
    mac,
    phone_number,
    rgb,
    rgba,
    uuid,
    version,
)

__all__ = [
    "country_code",
    "date",
    "datetime_",
    "decimal",
    "email",
    "ip",
    "isbn",
    "json",
    "jwt",
    "latitude",
    "locale",
    "longitude",
    "mac",
    "never",
    "phone_number",
    "port",
    "rgb",
    "rgba",
    "time",
    "timestamp",
    "timezone",
    "unknown",
    "url",
    "uuid",
    "version",
    "void",
]
