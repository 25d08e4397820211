"""
collectd PUTNOTIF protocol implementation.

This module handles splitting input lines into bounded fragments and encoding
each fragment as one ``PUTNOTIF`` notification line.
"""

from typing import List, Tuple


COMMAND = b"PUTNOTIF"
SEVERITY = b"okay"

NUL = 0x00
LF = 0x0A
CR = 0x0D
BACKSLASH = 0x5C
QUOTE = 0x22


class Line:
    """
    One raw line read from the input stream.

    The logical content ends at the first NUL byte, or before the trailing
    line feed when there is no NUL.
    """

    def __init__(self, raw: bytes):
        self.raw = raw
        self.length = logical_length(raw)

    def __repr__(self) -> str:
        return f"Line(raw_len={len(self.raw)}, length={self.length})"


def logical_length(raw: bytes) -> int:
    """Number of bytes of ``raw`` that belong to the message."""
    nul = raw.find(b"\x00")
    if nul >= 0:
        return nul
    if raw.endswith(b"\n"):
        return len(raw) - 1
    return len(raw)


def fragment_count(length: int, max_chunk: int) -> int:
    """Number of chunks of at most ``max_chunk`` bytes needed for ``length`` bytes."""
    chunks, rem = divmod(length, max_chunk)
    return chunks + (1 if rem else 0)


def split(length: int, max_chunk: int) -> List[Tuple[int, int]]:
    """
    Split ``[0, length)`` into contiguous ``(start, end)`` ranges.

    Every range is ``max_chunk`` bytes long except possibly the last one.
    An empty line yields no ranges.
    """
    ranges = []
    start = 0
    for _ in range(fragment_count(length, max_chunk)):
        end = min(start + max_chunk, length)
        ranges.append((start, end))
        start = end
    return ranges


def escape(chunk: bytes) -> bytes:
    """
    Escape a fragment body for a quoted ``message=`` value.

    Backslashes and double quotes are escaped. The body is cut at the first
    carriage return or line feed.
    """
    out = bytearray()
    for c in chunk:
        if c == BACKSLASH:
            out += b"\\\\"
        elif c == QUOTE:
            out += b'\\"'
        elif c == CR or c == LF:
            break
        else:
            out.append(c)
    return bytes(out)


class Fragment:
    """A byte range of a line together with its position in the line."""

    def __init__(self, start: int, end: int, seq: int, total: int):
        self.start = start
        self.end = end
        self.seq = seq
        self.total = total

    def header(self, event_id: int) -> bytes:
        """Correlation header ``@id:seq:total@``, empty for unsplit lines."""
        if self.total <= 1:
            return b""
        return f"@{event_id}:{self.seq}:{self.total}@".encode("ascii")

    def __repr__(self) -> str:
        return f"Fragment({self.start}, {self.end}, seq={self.seq}, total={self.total})"


def fragments(line: Line, max_chunk: int) -> List[Fragment]:
    """Fragments of ``line`` in emission order."""
    ranges = split(line.length, max_chunk)
    total = len(ranges)
    return [
        Fragment(start, end, seq, total)
        for seq, (start, end) in enumerate(ranges, start=1)
    ]


class NotificationFrame:
    """
    Represents one PUTNOTIF notification line.

    Wire format:
    PUTNOTIF host=<h> severity=okay time=<t> plugin=<p> type=<c> message="[@id:seq:total@]<body>"\\n
    """

    def __init__(
        self,
        hostname: str,
        timestamp: int,
        plugin: str,
        ctype: str,
        body: bytes,
        header: bytes = b"",
    ):
        self.hostname = hostname
        self.timestamp = timestamp
        self.plugin = plugin
        self.ctype = ctype
        self.body = body
        self.header = header

    def prefix(self) -> bytes:
        """Everything up to and including the opening quote of the message."""
        return b"%s host=%s severity=%s time=%d plugin=%s type=%s message=\"" % (
            COMMAND,
            self.hostname.encode("utf-8"),
            SEVERITY,
            self.timestamp,
            self.plugin.encode("utf-8"),
            self.ctype.encode("utf-8"),
        )

    def encode(self) -> bytes:
        """
        Encode the notification as a complete protocol line.

        Returns:
            bytes: Line ready to be written, terminated by a line feed
        """
        return self.prefix() + self.header + escape(self.body) + b"\"\n"

    def __repr__(self) -> str:
        return (
            f"NotificationFrame(host={self.hostname!r}, time={self.timestamp}, "
            f"header={self.header!r}, body_len={len(self.body)})"
        )


class CorrelationTracker:
    """
    Hands out the rolling id that links fragments of one split line.
    """

    def __init__(self, max_event_id: int):
        self.max_event_id = max_event_id
        self.event_id = 1

    def advance(self) -> int:
        """Move to the next id, wrapping from ``max_event_id`` back to 1."""
        self.event_id = (self.event_id % self.max_event_id) + 1
        return self.event_id

    def reset(self) -> None:
        self.event_id = 1


def build_frames(
    line: Line,
    line_fragments: List[Fragment],
    hostname: str,
    timestamp: int,
    plugin: str,
    ctype: str,
    event_id: int,
) -> List[NotificationFrame]:
    """
    Build the notifications for the fragments of one accepted line.

    ``event_id`` is only used for the correlation header of split lines.
    """
    frames = []
    for fragment in line_fragments:
        header = fragment.header(event_id)
        frames.append(NotificationFrame(
            hostname,
            timestamp,
            plugin,
            ctype,
            line.raw[fragment.start:fragment.end],
            header,
        ))
    return frames
