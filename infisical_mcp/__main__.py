"""Allow ``python -m infisical_mcp`` to start the stdio server."""

from .stdio import main

if __name__ == "__main__":
    main()
