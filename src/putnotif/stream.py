"""
Blocking byte stream access for the notification loop.
"""

from typing import BinaryIO, Optional

from .exceptions import ReadError, WriteError
from .protocol import Line, NotificationFrame


class LineReader:
    """Reads raw lines from a binary input stream."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def read_line(self) -> Optional[Line]:
        """
        Read the next line, including a final line without terminator.

        Returns:
            Line, or None at end of stream

        Raises:
            ReadError: If the underlying read fails
        """
        try:
            raw = self.stream.readline()
        except OSError as e:
            raise ReadError(f"Failed to read line: {e}") from e

        if not raw:
            return None
        return Line(raw)


class ProtocolWriter:
    """
    Writes notifications to a binary output stream, one flush per message.
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def write(self, frame: NotificationFrame) -> int:
        """
        Write one notification and flush it.

        Returns:
            int: Number of bytes written

        Raises:
            WriteError: If writing or flushing fails
        """
        data = frame.encode()
        try:
            self.stream.write(data)
            self.stream.flush()
        except OSError as e:
            raise WriteError(f"Failed to write notification: {e}") from e

        return len(data)

    def write_raw(self, data: bytes) -> None:
        """Write and flush diagnostic bytes, used for the error stream."""
        try:
            self.stream.write(data)
            self.stream.flush()
        except OSError as e:
            raise WriteError(f"Failed to write diagnostic: {e}") from e
