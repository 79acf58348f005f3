"""
Entry point for running factdeck as a module.

Usage:
    python -m factdeck play
    python -m factdeck fetch --subject space
    python -m factdeck --help
"""
from .cli.main import main

if __name__ == "__main__":
    main()
