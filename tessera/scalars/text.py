"""
String-valued scalars: identifiers, codes and formats that stay strings in
the domain.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from hypothesis import strategies as st

from ..custom import custom
from ..decoder import decode_without_validation
from ..model import CustomType, string
from ..patterns import from_pattern
from ..result import Result, fail, succeed

EMAIL_PATTERN = re.compile(
    r"[-!#$%&'*+/0-9=?A-Z^_a-z`{|}~](\.?[-!#$%&'*+/0-9=?A-Z^_a-z`{|}~])*"
    r"@[a-zA-Z0-9](-*\.?[a-zA-Z0-9])*\.[a-zA-Z](-?[a-zA-Z0-9])+"
)
MAX_EMAIL_ACCOUNT_LENGTH = 64
MAX_EMAIL_DOMAIN_LENGTH = 255
MAX_EMAIL_LABEL_LENGTH = 63

PHONE_NUMBER_PATTERN = r"\+[1-9][0-9]{6,14}"

UUID_PATTERN = (
    r"\{?[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\}?"
)

VERSION_PATTERN = (
    r"(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)"
    r"(?:-((?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"
)

JWT_PATTERN = r"[a-zA-Z0-9\-_]+?\.[a-zA-Z0-9\-_]+?\.([a-zA-Z0-9\-_]+)?"

ISBN10_PATTERN = re.compile(
    r"(?:ISBN(?:-10)?:? *)?((?=\d{1,5}([ -]?)\d{1,7}\2?\d{1,6}\2?\d)(?:\d\2*){9}[\dX])",
    re.IGNORECASE | re.ASCII,
)
ISBN13_PATTERN = re.compile(
    r"(?:ISBN(?:-13)?:? *)?(97(?:8|9)([ -]?)(?=\d{1,5}\2?\d{1,7}\2?\d{1,6}\2?\d)(?:\d\2*){9}\d)",
    re.IGNORECASE | re.ASCII,
)

_CHANNEL = r"(-?\d+|-?\d*\.\d+(?=%))"
RGB_PATTERN = re.compile(
    rf"rgb\(\s*{_CHANNEL}(%?)\s*,\s*{_CHANNEL}(\2)\s*,\s*{_CHANNEL}(\2)\s*\)", re.ASCII
)
RGBA_PATTERN = re.compile(
    rf"rgba\(\s*{_CHANNEL}(%?)\s*,\s*{_CHANNEL}(\2)\s*,\s*{_CHANNEL}(\2)\s*,\s*(-?\d+|-?\d*\.\d+)\s*\)",
    re.ASCII,
)

MAC_PATTERN = (
    r"(?:[0-9A-Fa-f]{2}([:-]?)[0-9A-Fa-f]{2})"
    r"(?:(?:\1|\.)(?:[0-9A-Fa-f]{2}([:-]?)[0-9A-Fa-f]{2})){2}"
)

# ISO 3166-1 alpha-2
COUNTRY_CODES = frozenset(
    """
    AD AE AF AG AI AL AM AO AQ AR AS AT AU AW AX AZ BA BB BD BE BF BG BH BI BJ
    BL BM BN BO BQ BR BS BT BV BW BY BZ CA CC CD CF CG CH CI CK CL CM CN CO CR
    CU CV CW CX CY CZ DE DJ DK DM DO DZ EC EE EG EH ER ES ET FI FJ FK FM FO FR
    GA GB GD GE GF GG GH GI GL GM GN GP GQ GR GS GT GU GW GY HK HM HN HR HT HU
    ID IE IL IM IN IO IQ IR IS IT JE JM JO JP KE KG KH KI KM KN KP KR KW KY KZ
    LA LB LC LI LK LR LS LT LU LV LY MA MC MD ME MF MG MH MK ML MM MN MO MP MQ
    MR MS MT MU MV MW MX MY MZ NA NC NE NF NG NI NL NO NP NR NU NZ OM PA PE PF
    PG PH PK PL PM PN PR PS PT PW PY QA RE RO RS RU RW SA SB SC SD SE SG SH SI
    SJ SK SL SM SN SO SR SS ST SV SX SY SZ TC TD TF TG TH TJ TK TL TM TN TO TR
    TT TV TW TZ UA UG UM US UY UZ VA VC VE VG VI VN VU WF WS YE YT ZA ZM ZW
    """.split()
)

# ISO 639-1
LANGUAGE_CODES = frozenset(
    """
    ab aa af ak sq am ar an hy as av ae ay az bm ba eu be bn bh bi bs br bg my
    ca ch ce ny zh cv kw co cr hr cs da dv nl dz en eo et ee fo fj fi fr ff gl
    ka de el gn gu ht ha he hz hi ho hu ia id ie ga ig ik io is it iu ja jv kl
    kn kr ks kk km ki rw ky kv kg ko ku kj la lb lg li ln lo lt lu lv gv mk mg
    ms ml mt mi mr mh mn na nv nb nd ne ng nn no ii nr oc oj cu om or os pa pi
    fa pl ps pt qu rm rn ro ru sa sc sd se sm sg sr gd sn si sk sl so st es su
    sw ss sv ta te tg th ti bo tk tl tn to tr ts tt tw ty ug uk ur uz ve vi vo
    wa cy wo fy xh yi yo za zu
    """.split()
)


def _alternation(words: frozenset[str]) -> str:
    return "|".join(sorted(words))


def _decode_string(value: Any, decode_options: Any, _options: Mapping[str, Any]) -> Result[str]:
    return decode_without_validation(string(), value, decode_options)


def _validate_email(value: Any, _validation_options: Any, _options: Mapping[str, Any]) -> Result[bool]:
    if not isinstance(value, str):
        return fail("expected a string", value)
    parts = value.split("@")
    if len(parts) != 2:
        return fail("Invalid email (no @ present)", value)
    account, domain = parts
    if len(account) > MAX_EMAIL_ACCOUNT_LENGTH:
        return fail(
            f"Invalid email (account is longer than {MAX_EMAIL_ACCOUNT_LENGTH} characters)", value
        )
    if len(domain) > MAX_EMAIL_DOMAIN_LENGTH:
        return fail(
            f"Invalid email (domain is longer than {MAX_EMAIL_DOMAIN_LENGTH} characters)", value
        )
    labels_too_long = any(len(label) > MAX_EMAIL_LABEL_LENGTH for label in domain.split("."))
    if labels_too_long or not EMAIL_PATTERN.fullmatch(value):
        return fail("Invalid email", value)
    return succeed(True)


def email(**options: Any) -> CustomType:
    """
    An e-mail address.

    Usage:
        decode(email(), "user@example.com")  # Ok("user@example.com")
        decode(email(), "not-an-email")      # Err: Invalid email (no @ present)
    """
    return custom(
        "email",
        lambda value, _encode_options, _options: value,
        _decode_string,
        _validate_email,
        lambda _max_depth, _options: st.from_regex(
            r"[a-z][a-z0-9]{0,15}@[a-z][a-z0-9]{0,15}\.[a-z]{2,6}", fullmatch=True
        ),
        **options,
    )


def phone_number(**options: Any) -> CustomType:
    """A phone number in E.164 format, e.g. +393331234567."""
    return from_pattern(
        "phone_number", "Invalid phone number (E.164)", options, None, PHONE_NUMBER_PATTERN
    )


def country_code(**options: Any) -> CustomType:
    """An upper case ISO 3166-1 alpha-2 country code."""
    return from_pattern(
        "country_code",
        "Invalid ISO 3166-1 alpha-2 country code",
        options,
        st.sampled_from(sorted(COUNTRY_CODES)),
        _alternation(COUNTRY_CODES),
    )


def locale(**options: Any) -> CustomType:
    """An ISO 639-1 language code, in any case."""
    return from_pattern(
        "locale",
        "Invalid ISO 639-1 locale",
        options,
        st.sampled_from(sorted(LANGUAGE_CODES)),
        re.compile(_alternation(LANGUAGE_CODES), re.IGNORECASE),
    )


def uuid(**options: Any) -> CustomType:
    return from_pattern(
        "uuid",
        "Invalid Universally Unique Identifier",
        options,
        st.uuids().map(str),
        UUID_PATTERN,
    )


def version(**options: Any) -> CustomType:
    """A semantic version, e.g. 1.2.3-rc.1+build.5."""
    core = st.integers(min_value=0, max_value=999)
    return from_pattern(
        "version",
        "Invalid semantic version",
        options,
        st.tuples(core, core, core).map(lambda parts: ".".join(map(str, parts))),
        VERSION_PATTERN,
    )


def jwt(**options: Any) -> CustomType:
    return from_pattern("jwt", "Invalid JWT", options, None, JWT_PATTERN)


def isbn(**options: Any) -> CustomType:
    """An ISBN-10 or ISBN-13, with or without separators and prefix."""
    return from_pattern(
        "isbn",
        "Invalid ISBN (must be ISBN-10 or ISBN-13)",
        options,
        st.from_regex(r"97[89][0-9]{10}", fullmatch=True),
        ISBN10_PATTERN,
        ISBN13_PATTERN,
    )


_channels = st.tuples(*(st.integers(min_value=0, max_value=255),) * 3)


def rgb(**options: Any) -> CustomType:
    """A CSS rgb() color, e.g. rgb(255, 0, 128) or rgb(100%, 0%, 50%)."""
    return from_pattern(
        "rgb",
        "Invalid CSS RGB color",
        options,
        _channels.map(lambda c: f"rgb({c[0]}, {c[1]}, {c[2]})"),
        RGB_PATTERN,
    )


def rgba(**options: Any) -> CustomType:
    return from_pattern(
        "rgba",
        "Invalid CSS RGBA color",
        options,
        st.tuples(_channels, st.integers(min_value=0, max_value=100)).map(
            lambda c: f"rgba({c[0][0]}, {c[0][1]}, {c[0][2]}, {c[1] / 100})"
        ),
        RGBA_PATTERN,
    )


def mac(**options: Any) -> CustomType:
    """An IEEE 802 48-bit MAC address, e.g. 00:1B:44:11:3A:B7."""
    return from_pattern(
        "mac",
        "Invalid IEEE 802 48-bit MAC address",
        options,
        st.lists(st.integers(min_value=0, max_value=255), min_size=6, max_size=6).map(
            lambda octets: ":".join(f"{octet:02X}" for octet in octets)
        ),
        MAC_PATTERN,
    )
