"""Module entrypoint for ``python -m gitt``."""

from .cli import main


if __name__ == "__main__":
    main()
