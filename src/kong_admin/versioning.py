"""Kong version parsing and version ranges.

Kong OSS versions are plain semantic versions (``3.4.1``); Kong Enterprise
adds a fourth revision component (``3.4.1.0``). Ranges are used to gate
features on the version a node reports.

Example:
    >>> supports_partials = parse_range(">=3.10.0")
    >>> supports_partials(Version.parse("3.10.0.1"))
    True
"""

from __future__ import annotations

import operator
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any

_NUM = r"0|[1-9]\d*"
_IDENT = r"[0-9A-Za-z-]+"
_DOTTED = rf"{_IDENT}(?:\.{_IDENT})*"

_VERSION_RE = re.compile(
    rf"^(?P<major>{_NUM})\.(?P<minor>{_NUM})\.(?P<patch>{_NUM})"
    rf"(?:\.(?P<revision>{_NUM}))?"
    rf"(?:-(?P<pre>{_DOTTED}))?"
    rf"(?:\+(?P<build>{_DOTTED}))?$"
)

# Loose form of versions reported by Kong nodes, e.g. "2.1", "3.4.1.0-enterprise-edition".
_REPORTED_RE = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:[-.]?(.+))?$")

_COMPARATOR_RE = re.compile(r"^(?P<op><=|>=|!=|==|<|>|=|!)?(?P<version>.+)$")
_OPERATOR_ONLY = {"<", "<=", ">", ">=", "=", "==", "!", "!="}

_OPERATORS: dict[str, Callable[[int, int], bool]] = {
    "": operator.eq,
    "=": operator.eq,
    "==": operator.eq,
    "!": operator.ne,
    "!=": operator.ne,
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


class InvalidVersionError(ValueError):
    """Raised when a version or range string cannot be parsed."""


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _strip_leading_zeros(ident: str) -> str:
    if ident.isdigit():
        return ident.lstrip("0") or "0"
    return ident


def _compare_pre_release(a: tuple[str, ...], b: tuple[str, ...]) -> int:
    # A version without pre-release ranks above any pre-release of it.
    if not a and not b:
        return 0
    if not a:
        return 1
    if not b:
        return -1
    for left, right in zip(a, b, strict=False):
        if left == right:
            continue
        left_numeric, right_numeric = left.isdigit(), right.isdigit()
        if left_numeric and right_numeric:
            return _sign(int(left) - int(right))
        if left_numeric:
            return -1
        if right_numeric:
            return 1
        return -1 if left < right else 1
    return _sign(len(a) - len(b))


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A three- or four-component version.

    Attributes:
        major: Major component.
        minor: Minor component.
        patch: Patch component.
        revision: Enterprise revision (fourth component), if present.
        pre_release: Dot-separated pre-release identifiers.
        build: Dot-separated build metadata identifiers.

    Comparison follows semantic versioning with two additions: the revision
    is compared only when both sides carry one, and build metadata never
    affects ordering or equality.
    """

    major: int
    minor: int
    patch: int
    revision: int | None = None
    pre_release: tuple[str, ...] = field(default=())
    build: tuple[str, ...] = field(default=())

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a strict version string.

        Raises:
            InvalidVersionError: If the string is not a valid version.
        """
        match = _VERSION_RE.match(text.strip())
        if match is None:
            raise InvalidVersionError(f"invalid version: {text!r}")
        pre = tuple(match["pre"].split(".")) if match["pre"] else ()
        for ident in pre:
            if ident.isdigit() and len(ident) > 1 and ident.startswith("0"):
                raise InvalidVersionError(
                    f"invalid version: {text!r} (leading zero in pre-release)"
                )
        return cls(
            major=int(match["major"]),
            minor=int(match["minor"]),
            patch=int(match["patch"]),
            revision=int(match["revision"]) if match["revision"] is not None else None,
            pre_release=pre,
            build=tuple(match["build"].split(".")) if match["build"] else (),
        )

    def finalized(self) -> Version:
        """Return the version without pre-release and build metadata."""
        return Version(self.major, self.minor, self.patch, self.revision)

    @property
    def is_enterprise(self) -> bool:
        """Return True for Kong Enterprise versions (revision or 'enterprise' tag)."""
        if self.revision is not None:
            return True
        return any("enterprise" in ident for ident in (*self.pre_release, *self.build))

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 as this version sorts before, equal to, or after ``other``.

        The revision only takes part when both versions carry one, so
        ``1.2.3`` equals both ``1.2.3.1`` and ``1.2.3.2`` while those two
        differ. Equality is therefore not transitive across versions with
        and without a revision: sorting a list that mixes them may order
        the revision-less entries arbitrarily among their revisioned peers.
        """
        pairs = [
            (self.major, other.major),
            (self.minor, other.minor),
            (self.patch, other.patch),
        ]
        if self.revision is not None and other.revision is not None:
            pairs.append((self.revision, other.revision))
        for left, right in pairs:
            if left != right:
                return _sign(left - right)
        return _compare_pre_release(self.pre_release, other.pre_release)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch))

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.revision is not None:
            text += f".{self.revision}"
        if self.pre_release:
            text += "-" + ".".join(self.pre_release)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


@dataclass(frozen=True)
class _Comparator:
    op: str
    bound: Version

    def __call__(self, version: Version) -> bool:
        return _OPERATORS[self.op](version.compare(self.bound), 0)


class Range:
    """A parsed version range.

    Comparators separated by whitespace must all hold (AND); groups separated
    by ``||`` are alternatives (OR). Supported operators are ``<``, ``<=``,
    ``>``, ``>=``, ``=``, ``==``, ``!`` and ``!=``; no operator means equality.

    The version tested against a range has its pre-release and build
    metadata dropped first.

    Example:
        >>> r = parse_range(">=1.0.0 <2.0.0 || >=3.0.0")
        >>> r("1.9.9-alpha+build")
        True
    """

    def __init__(self, expression: str) -> None:
        self.expression = expression
        self._groups = self._parse(expression)

    @staticmethod
    def _parse(expression: str) -> list[list[_Comparator]]:
        groups: list[list[_Comparator]] = []
        for part in expression.split("||"):
            tokens = part.split()
            if not tokens:
                raise InvalidVersionError(f"invalid range: {expression!r} (empty comparator set)")
            # Join an operator written apart from its version ("<= 1.2.3").
            merged: list[str] = []
            pending = ""
            for token in tokens:
                if token in _OPERATOR_ONLY and not pending:
                    pending = token
                    continue
                merged.append(pending + token)
                pending = ""
            if pending:
                raise InvalidVersionError(f"invalid range: {expression!r} (dangling {pending!r})")
            group: list[_Comparator] = []
            for token in merged:
                match = _COMPARATOR_RE.match(token)
                if match is None:
                    raise InvalidVersionError(f"invalid range: {expression!r}")
                try:
                    bound = Version.parse(match["version"])
                except InvalidVersionError as e:
                    raise InvalidVersionError(f"invalid range: {expression!r} ({e})") from e
                group.append(_Comparator(match["op"] or "", bound))
            groups.append(group)
        return groups

    def contains(self, version: Version | str) -> bool:
        """Return True if the version satisfies the range."""
        if isinstance(version, str):
            version = Version.parse(version)
        candidate = version.finalized()
        return any(all(cmp(candidate) for cmp in group) for group in self._groups)

    __call__ = contains

    def __repr__(self) -> str:
        return f"Range({self.expression!r})"


def parse_range(expression: str) -> Range:
    """Parse a range expression.

    Raises:
        InvalidVersionError: If the expression or any bound is invalid.
    """
    return Range(expression)


def version_from_info(info: Mapping[str, Any]) -> Version:
    """Parse the version reported by a Kong node's root endpoint.

    Accepts the loose forms Kong reports (``2.1``, ``2.8.1``,
    ``3.4.1.0-enterprise-edition``) as well as strict versions.

    Raises:
        InvalidVersionError: If no version is present or it cannot be parsed.
    """
    raw = info.get("version")
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidVersionError("node info carries no version")
    raw = raw.strip()
    if _VERSION_RE.match(raw):
        return Version.parse(raw)
    match = _REPORTED_RE.match(raw)
    if match is None:
        raise InvalidVersionError(f"unknown Kong version: {raw!r}")
    major, minor, patch, revision, suffix = match.groups()
    pre: tuple[str, ...] = ()
    if suffix:
        cleaned = re.sub(r"[^0-9A-Za-z.-]", "-", suffix).strip(".")
        pre = tuple(_strip_leading_zeros(ident) for ident in cleaned.split(".") if ident)
    return Version(
        major=int(major),
        minor=int(minor),
        patch=int(patch or 0),
        revision=int(revision) if revision is not None else None,
        pre_release=pre,
    )
