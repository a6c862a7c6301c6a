"""Building blocks for an APRS-IS gateway: client, forwarding task, boards, display and timer."""

__version__ = "0.2.0"