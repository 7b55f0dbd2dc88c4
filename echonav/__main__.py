"""Module entrypoint for ``python -m echonav``.

All argument parsing and runtime setup happen in ``echonav.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
