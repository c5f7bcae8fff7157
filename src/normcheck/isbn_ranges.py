"""
ISBN registration-group ranges published by the International ISBN Agency.

What this does
--------------
- Downloads (or reads from disk) the agency's ``RangeMessage.xml``.
- Parses the ``RegistrationGroups`` section into `RangeGroup` / `RangeRule`
  records.
- Answers "which group and registrant rule does this 13-digit ISBN body fall
  in?" so the ISBN validator can reject unassigned prefixes and place the
  hyphens.

Lifecycle
---------
A `RangeAuthority` loads its document at most once. The first caller pays for
the download; concurrent first callers wait on a lock rather than fetching
twice. A failed load leaves the authority empty, so a later call tries again.

The process-wide default authority reads the agency URL. Tests and offline
deployments swap it with `set_default_authority()` or pass an authority to
`validate_isbn` directly.
"""

from __future__ import annotations

import logging
import threading
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

import requests

from .errors import RangeAuthorityError

logger = logging.getLogger(__name__)

DEFAULT_RANGE_URL = "https://www.isbn-international.org/export_rangemessage.xml"
DEFAULT_TIMEOUT = 30.0


# ---- Data model --------------------------------------------------------------------------

@dataclass(frozen=True)
class RangeRule:
    """
    One registrant range within a group.

    Attributes:
        length: number of registrant digits for bodies in this range (0 = unassigned).
        lower:  lower bound as published (e.g. "0000000").
        upper:  upper bound, same width as `lower`.
    """
    length: int
    lower: str
    upper: str

    def contains(self, digits: str) -> bool:
        """True if the rule is assigned and the leading digits (bound width) fall within the bounds."""
        if self.length == 0 or len(digits) < self.length:
            return False
        width = len(self.lower)
        candidate = digits[:width].ljust(width, "0")
        return self.lower <= candidate <= self.upper


@dataclass(frozen=True)
class RangeGroup:
    """A registration group, e.g. prefix "978-0" (English language)."""
    ean: str
    leader: str
    rules: Tuple[RangeRule, ...]
    agency: str = ""

    @property
    def prefix(self) -> str:
        return f"{self.ean}-{self.leader}"


@dataclass(frozen=True)
class RangeMatch:
    group: RangeGroup
    rule: RangeRule


@dataclass(frozen=True)
class RangeMessage:
    """Parsed range document: registration groups in document order."""
    groups: Tuple[RangeGroup, ...]
    serial: str = ""
    date: str = ""

    def match(self, digits: str) -> Optional[RangeMatch]:
        """
        Find the group and rule for a 12- or 13-digit ISBN body.

        The first group whose prefix starts `digits` and the first of its
        rules containing the digits that follow win.
        """
        for group in self.groups:
            head = group.ean + group.leader
            if not digits.startswith(head):
                continue
            remainder = digits[len(head):]
            for rule in group.rules:
                if rule.contains(remainder):
                    return RangeMatch(group, rule)
        return None


# ---- Parsing -----------------------------------------------------------------------------

def _child_text(element: ET.Element, tag: str) -> str:
    text = element.findtext(tag)
    if text is None or not text.strip():
        raise RangeAuthorityError(f"ISBN range document: <{element.tag}> has no <{tag}>")
    return text.strip()


def _parse_rule(element: ET.Element) -> RangeRule:
    length_text = _child_text(element, "Length")
    range_text = _child_text(element, "Range")
    try:
        length = int(length_text)
    except ValueError as exc:
        raise RangeAuthorityError(f"ISBN range document: bad rule length {length_text!r}") from exc
    lower, sep, upper = range_text.partition("-")
    if not sep or len(lower) != len(upper) or not (0 <= length <= len(lower)):
        raise RangeAuthorityError(f"ISBN range document: bad rule range {range_text!r}")
    return RangeRule(length=length, lower=lower, upper=upper)


def _parse_group(element: ET.Element) -> RangeGroup:
    prefix = _child_text(element, "Prefix")
    ean, sep, leader = prefix.partition("-")
    if not sep or not ean.isdigit() or not leader.isdigit():
        raise RangeAuthorityError(f"ISBN range document: bad group prefix {prefix!r}")
    rules = tuple(_parse_rule(rule) for rule in element.iter("Rule"))
    return RangeGroup(ean=ean, leader=leader, rules=rules, agency=(element.findtext("Agency") or "").strip())


def parse_range_message(data: Union[bytes, str]) -> RangeMessage:
    """
    Parse the agency's RangeMessage XML.

    Raises:
        RangeAuthorityError: the document is not XML, or lacks the expected
            ``RegistrationGroups/Group/{Prefix, Rules/Rule/{Range, Length}}``.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise RangeAuthorityError("ISBN range document not parsed") from exc

    groups = tuple(
        _parse_group(group)
        for registration in root.iter("RegistrationGroups")
        for group in registration.iter("Group")
    )
    if not groups:
        raise RangeAuthorityError("ISBN range document contains no registration groups")
    return RangeMessage(
        groups=groups,
        serial=(root.findtext("MessageSerialNumber") or "").strip(),
        date=(root.findtext("MessageDate") or "").strip(),
    )


# ---- Sources -----------------------------------------------------------------------------

def fetch_range_message(
    url: str = DEFAULT_RANGE_URL,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> bytes:
    """Download the raw range document; redirects are followed."""
    logger.debug("Fetching ISBN range document from %s", url)
    try:
        response = (session or requests).get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.error(f"ISBN range document download failed: {exc}")
        raise RangeAuthorityError("ISBN range document not available") from exc
    return response.content


def read_range_file(path: Union[str, Path]) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise RangeAuthorityError(f"ISBN range document {path} not readable") from exc


# ---- Authority ---------------------------------------------------------------------------

class RangeAuthority:
    """
    Holder of a `RangeMessage` that is loaded once, on first use.

    Parameters
    ----------
    loader : callable
        Produces the parsed message; may raise `RangeAuthorityError`.
    source : str
        Description for log messages (URL, path...).
    """

    def __init__(self, loader: Callable[[], RangeMessage], source: str = "") -> None:
        self._loader = loader
        self._source = source
        self._message: Optional[RangeMessage] = None
        self._lock = threading.Lock()

    @classmethod
    def from_url(
        cls,
        url: str = DEFAULT_RANGE_URL,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> "RangeAuthority":
        return cls(lambda: parse_range_message(fetch_range_message(url, timeout, session)), source=url)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "RangeAuthority":
        return cls(lambda: parse_range_message(read_range_file(path)), source=str(path))

    @classmethod
    def from_message(cls, message: RangeMessage) -> "RangeAuthority":
        return cls(lambda: message, source="memory")

    @property
    def source(self) -> str:
        return self._source

    @property
    def loaded(self) -> bool:
        return self._message is not None

    def message(self) -> RangeMessage:
        """Return the message, loading it first if this is the first use."""
        message = self._message
        if message is not None:
            return message
        with self._lock:
            if self._message is None:
                logger.info("Loading ISBN ranges from %s", self._source)
                self._message = self._loader()
                logger.info("Loaded %d ISBN registration groups", len(self._message.groups))
            return self._message

    def match(self, digits: str) -> Optional[RangeMatch]:
        return self.message().match(digits)


_default_authority: Optional[RangeAuthority] = None
_default_lock = threading.Lock()


def default_authority() -> RangeAuthority:
    """The process-wide authority (agency URL unless replaced)."""
    global _default_authority
    with _default_lock:
        if _default_authority is None:
            _default_authority = RangeAuthority.from_url()
        return _default_authority


def set_default_authority(authority: Optional[RangeAuthority]) -> None:
    """Install `authority` as the process-wide default (None restores the URL default)."""
    global _default_authority
    with _default_lock:
        _default_authority = authority
