"""Operator tooling for the Claude Relay Service: admin credential reset and multi-arch image publishing."""

__version__ = "0.1.0"
