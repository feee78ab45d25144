"""
Casper Network MCP server package.

This package exposes LLM-friendly blockchain-explorer tools backed by the
CSPR.cloud REST API. See DESIGN.md for full details.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
