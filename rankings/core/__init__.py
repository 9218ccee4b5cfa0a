"""Core application plumbing: logging, errors, security, wire negotiation."""
