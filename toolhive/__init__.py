"""Encrypted secrets, local state storage, JSON-RPC handling and update checks for MCP tooling."""

__version__ = "0.1.0"