"""Entry point for the Proyectate CLI.

Usage:
    python -m proyectate.interfaces.cli.main

Or via installed entry point:
    proyectate <command>
"""

from proyectate.interfaces.cli import app


def main() -> None:
    """Run the Proyectate CLI application."""
    app()


if __name__ == "__main__":
    main()
