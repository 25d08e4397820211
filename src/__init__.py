"""
stdout to collectd notifications

Reads text lines on standard input and writes them to standard output as
collectd PUTNOTIF notifications, with rate limiting and fragmentation of
long lines.
"""

__version__ = "0.1.0"
__description__ = "stdout to collectd notifications"
