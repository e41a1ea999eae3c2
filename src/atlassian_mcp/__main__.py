"""Entry point for ``python -m atlassian_mcp``."""

from . import main

main()
