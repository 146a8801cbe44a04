"""Package entry point for ``python -m freesound_client``."""

from freesound_client.cli import main

if __name__ == "__main__":
    main()
