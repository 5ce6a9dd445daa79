from __future__ import annotations


class ScanError(Exception):
    """A scan attempt could not produce signals."""


class FetchError(ScanError):
    """The target page was unreachable (DNS, connect, timeout, bad URL)."""


class ParseError(ScanError):
    """The response body could not be parsed as markup at all."""
