"""Module entrypoint for ``python -m lazydu``.

Argument parsing, logging setup, and session startup happen in ``lazydu.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
