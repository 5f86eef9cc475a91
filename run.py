"""
Action runner.

Usage (inside a GitHub Actions job):
    python run.py

Inputs arrive as INPUT_* environment variables; a local .env file is also
read. Set INPUT_DEBUG=true to enable debug logging and INPUT_DRY_RUN=true to
skip every write to the repository.
"""

from release_flow.main import main

if __name__ == "__main__":
    main()
