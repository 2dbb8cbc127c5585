"""Launch the SwimTracker CLI from a source checkout (python run_cli.py analyze samples.json)."""

from cli.cli import app

if __name__ == "__main__":
    app()
