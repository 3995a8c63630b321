"""Listing and loading snapshots of pages kept by the Internet Archive."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import BinaryIO, Optional
from urllib.parse import urlencode

import requests

from fineprint.htmlutil import extract_text

log = logging.getLogger(__name__)

_CDX_URL = "https://web.archive.org/cdx/search/cdx"
_SNAPSHOT_URL = "https://web.archive.org/web/{timestamp}/{url}"


class WebArchiveError(Exception):
    """Raised when the archive cannot be queried or its answer is unusable."""


@dataclass(frozen=True)
class Snapshot:
    """One capture of a page, as listed by the archive's CDX index."""

    timestamp: datetime
    mime_type: str
    status_code: int
    digest: str
    length: int


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError as exc:
        raise ValueError(f"invalid number {text!r}") from exc


def parse_timestamp(ts: str) -> datetime:
    """Parse a YYYYMMDDhhmmss archive timestamp into a UTC datetime.

    Out-of-range fields roll over into the next larger unit. Raises
    ValueError if the string is too short or holds non-numeric fields.
    """
    if len(ts) < 14:
        raise ValueError("ts string was too short")
    try:
        year = _parse_int(ts[0:4])
        month = _parse_int(ts[4:6])
        day = _parse_int(ts[6:8])
        hour = _parse_int(ts[8:10])
        minute = _parse_int(ts[10:12])
        second = _parse_int(ts[12:14])
    except ValueError as exc:
        raise ValueError(f"failed to parse date string: {exc}") from exc

    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    base = datetime(year, month, 1, tzinfo=timezone.utc)
    return base + timedelta(days=day - 1, hours=hour, minutes=minute, seconds=second)


def format_timestamp(ts: datetime) -> str:
    """Format a datetime as a YYYYMMDDhhmmss archive timestamp."""
    return (
        f"{ts.year:04d}{ts.month:02d}{ts.day:02d}"
        f"{ts.hour:02d}{ts.minute:02d}{ts.second:02d}"
    )


class WaybackToolbarStripper:
    """A binary reader that drops the archive's injected toolbar markup."""

    START_MARKER = b"<!-- BEGIN WAYBACK TOOLBAR INSERT -->"
    END_MARKER = b"<!-- END WAYBACK TOOLBAR INSERT -->"

    def __init__(self, source: BinaryIO, chunk_size: int = 4096) -> None:
        self._source = source
        self._chunk_size = chunk_size
        self._pending = bytearray()
        self._eof = False
        self._in_toolbar = False
        self._match = 0
        self._end_match = 0

    def _feed(self, chunk: bytes) -> None:
        start, end = self.START_MARKER, self.END_MARKER
        out = self._pending
        for byte in chunk:
            if self._in_toolbar:
                if self._end_match < len(end) and byte == end[self._end_match]:
                    self._end_match += 1
                    if self._end_match == len(end):
                        self._in_toolbar = False
                        self._end_match = 0
                else:
                    self._end_match = 1 if byte == end[0] else 0
            elif byte == start[self._match]:
                self._match += 1
                if self._match == len(start):
                    self._in_toolbar = True
                    self._match = 0
            else:
                if self._match:
                    out += start[: self._match]
                    self._match = 0
                if byte == start[0]:
                    self._match = 1
                else:
                    out.append(byte)

    def _fill(self) -> None:
        chunk = self._source.read(self._chunk_size)
        if not chunk:
            self._eof = True
            return
        self._feed(chunk)

    def read(self, size: Optional[int] = -1) -> bytes:
        """Read up to size bytes, or everything when size is negative or None."""
        if size is None or size < 0:
            while not self._eof:
                self._fill()
            data = bytes(self._pending)
            self._pending.clear()
            return data
        while len(self._pending) < size and not self._eof:
            self._fill()
        data = bytes(self._pending[:size])
        del self._pending[:size]
        return data


class Client:
    """Client for the archive's CDX index and snapshot pages."""

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        session: Optional[requests.Session] = None,
        timeout: float = 60.0,
    ) -> None:
        self.access_key = access_key
        self.secret_key = secret_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, url: str, what: str) -> requests.Response:
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise WebArchiveError(f"failed to {what}: {exc}") from exc
        return resp

    def get_snapshots(self, target_url: str) -> list[Snapshot]:
        """Return the latest snapshots of target_url, skipping redirects."""
        params = {
            "url": target_url,
            "fl": "timestamp,mimetype,statuscode,digest,length",
            "output": "json",
            "fastLatest": "true",
            "limit": "-10",
        }
        url = f"{_CDX_URL}?{urlencode(sorted(params.items()))}"
        log.info("Getting snapshots via %r", url)
        resp = self._get(url, "fetch snapshots")
        if resp.status_code != 200:
            raise WebArchiveError(f"API request failed with status: {resp.status_code}")

        try:
            rows = resp.json()
        except ValueError as exc:
            raise WebArchiveError(f"failed to parse JSON response: {exc}") from exc
        if not isinstance(rows, list) or not all(
            isinstance(row, list) and all(isinstance(cell, str) for cell in row)
            for row in rows
        ):
            raise WebArchiveError("failed to parse JSON response: expected rows of strings")

        snapshots: list[Snapshot] = []
        for row in rows[1:]:
            if len(row) < 5 or row[2] == "-":
                continue
            try:
                timestamp = parse_timestamp(row[0])
            except ValueError as exc:
                raise WebArchiveError(f"failed to parse IA timestamp {row[0]!r}: {exc}") from exc
            try:
                status_code = _parse_int(row[2])
                length = _parse_int(row[4])
            except ValueError as exc:
                raise WebArchiveError(f"failed to parse date string: {exc}") from exc
            snapshots.append(
                Snapshot(
                    timestamp=timestamp,
                    mime_type=row[1],
                    status_code=status_code,
                    digest=row[3],
                    length=length,
                )
            )
        return snapshots

    def load_snapshot(self, original_url: str, timestamp: datetime) -> tuple[str, str]:
        """Return the body text of a snapshot and the URL it was loaded from."""
        snapshot_url = _SNAPSHOT_URL.format(
            timestamp=format_timestamp(timestamp), url=original_url
        )
        log.info("Snapshot url %r", snapshot_url)
        resp = self._get(snapshot_url, "load snapshot")
        if resp.status_code != 200:
            raise WebArchiveError(f"snapshot request failed with status: {resp.status_code}")

        stripped = WaybackToolbarStripper(io.BytesIO(resp.content)).read()
        try:
            text = extract_text(stripped)
        except ValueError as exc:
            raise WebArchiveError(f"failed to extract text from HTML: {exc}") from exc
        return text, snapshot_url