"""
Configuration for the PUTNOTIF adapter.

The notification loop receives a validated :class:`NotifierConfig`; parsing
of the ``plugin/type`` service identifier and hostname checks happen here,
before the loop starts.
"""

import argparse
import socket
from typing import Optional, Tuple

from .exceptions import ConfigurationError, InvalidHostnameError, InvalidServiceError


# collectd limits, terminating NUL included
DATA_MAX_LEN = 64
HOSTNAME_MAX_LEN = 16

DEFAULT_SERVICE = "stdout/prv"
DEFAULT_MAX_EVENT_LENGTH = 245  # 255 - 10
DEFAULT_MAX_EVENT_ID = 99
DEFAULT_WRITE_BUFFER = "block"


def _fits_data(value: str) -> bool:
    return 0 < len(value.encode("utf-8")) < DATA_MAX_LEN


def parse_service(service: str) -> Tuple[str, str]:
    """
    Split a ``<plugin>/<type>`` service identifier.

    Args:
        service: Identifier as given on the command line

    Returns:
        Tuple of (plugin, type)

    Raises:
        InvalidServiceError: If there is no ``/`` or a part is empty or too long
    """
    pos = service.find("/")
    if pos < 0:
        raise InvalidServiceError(f"invalid plugin/type: no `/` found in `{service}`")

    plugin = service[:pos]
    ctype = service[pos + 1:]

    if not _fits_data(plugin) or not _fits_data(ctype):
        raise InvalidServiceError(f"invalid service: {service}")

    return plugin, ctype


def resolve_hostname(hostname: Optional[str]) -> str:
    """
    Validate a user supplied hostname, or fall back to the system hostname.

    Raises:
        InvalidHostnameError: If the supplied hostname is too long
    """
    hostname = hostname or ""
    if len(hostname.encode("utf-8")) >= HOSTNAME_MAX_LEN:
        raise InvalidHostnameError(f"invalid hostname: {hostname}")

    if not hostname:
        hostname = socket.gethostname()

    return hostname


class NotifierConfig:
    """
    Settings shared by every stage of the notification loop.
    """

    def __init__(
        self,
        plugin: str = "stdout",
        ctype: str = "prv",
        hostname: str = "",
        limit: int = 0,
        window: int = 1,
        max_event_length: int = DEFAULT_MAX_EVENT_LENGTH,
        max_event_id: int = DEFAULT_MAX_EVENT_ID,
        write_buffer: str = DEFAULT_WRITE_BUFFER,
        verbose: bool = False,
        summary: bool = False,
        debug: bool = False,
    ):
        self.plugin = plugin
        self.ctype = ctype
        self.hostname = resolve_hostname(hostname)
        self.limit = limit
        self.window = window
        self.max_event_length = max_event_length
        self.max_event_id = max_event_id
        # Accepted for compatibility; the loop always blocks on a full pipe.
        self.write_buffer = write_buffer
        self.verbose = verbose
        self.summary = summary
        self.debug = debug
        self.validate()

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "NotifierConfig":
        """Build a configuration from parsed command line arguments."""
        plugin, ctype = parse_service(args.service)
        return cls(
            plugin=plugin,
            ctype=ctype,
            hostname=args.hostname,
            limit=args.limit,
            window=args.window,
            max_event_length=args.max_event_length,
            max_event_id=args.max_event_id,
            write_buffer=args.write_buffer,
            verbose=args.verbose,
            summary=args.summary,
            debug=args.debug,
        )

    def validate(self) -> None:
        """
        Check values the loop depends on.

        Raises:
            ConfigurationError: If a setting is out of range
        """
        if not _fits_data(self.plugin) or not _fits_data(self.ctype):
            raise InvalidServiceError(f"invalid service: {self.service}")
        if self.max_event_length < 1:
            raise ConfigurationError(f"invalid max event length: {self.max_event_length}")
        if self.max_event_id < 1:
            raise ConfigurationError(f"invalid max event id: {self.max_event_id}")
        if self.limit < 0:
            raise ConfigurationError(f"invalid limit: {self.limit}")
        if self.window < 0:
            raise ConfigurationError(f"invalid window: {self.window}")

    @property
    def service(self) -> str:
        return f"{self.plugin}/{self.ctype}"

    def __repr__(self) -> str:
        return (
            f"NotifierConfig(service={self.service!r}, hostname={self.hostname!r}, "
            f"limit={self.limit}, window={self.window}, "
            f"max_event_length={self.max_event_length}, max_event_id={self.max_event_id})"
        )
