"""
Configuration constants for the relay signaling surface.

This module contains the endpoint paths, timing defaults and limits used by
the relay client, the session registry and the signaling poller.
"""

# Endpoint paths (all POST, JSON bodies)
CREATE_ENDPOINT = "/api/create"
RENEW_ENDPOINT = "/api/renew"
ANSWER_ENDPOINT = "/api/answer"

# Renewal Configuration
DEFAULT_RENEW_INTERVAL = 5.0  # seconds
MIN_RENEW_INTERVAL = 0.1

# Network Configuration
DEFAULT_TIMEOUT = 10.0

# Download URL Configuration
DOWNLOAD_PATH_PREFIX = "/download/"
DEFAULT_PORTS = frozenset({"80", "443"})

# Session description types accepted from and sent to the relay
SDP_TYPES = frozenset({"offer", "answer", "pranswer", "rollback"})
