"""
Gatekeeper - connection concurrency admission for a remote-access gateway.

Decides whether a prospective connection may start, given global, per-connection,
per-group and per-user concurrency limits. Zero always means "unlimited".
"""

__version__ = "1.0.0"
