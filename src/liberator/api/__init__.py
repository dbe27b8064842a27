"""API layer: call-level surface for the HTTP service and the CLI.

This module provides the stable read API. Key rules:

1. No SQLAlchemy imports outside TYPE_CHECKING - only call engine functions
2. One connection per call; an existing connection is reused when passed in
3. Absent results are None or an empty mapping, never an exception
4. Return Pydantic models, Records, or plain containers of them
"""
