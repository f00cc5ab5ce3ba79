"""Main entry point for the quine CLI."""

from quine.cli import main

if __name__ == "__main__":
    main()
