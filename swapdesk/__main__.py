"""Entry point for ``python -m swapdesk``."""
from .cli import main

if __name__ == "__main__":
    main()
