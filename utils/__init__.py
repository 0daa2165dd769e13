"""Utility helpers shared by the server, the CLI and the providers."""
