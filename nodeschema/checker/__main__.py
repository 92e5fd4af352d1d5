"""Module entrypoint for `python -m nodeschema.checker`.

Delegates to the checker CLI implementation.
"""

from .run_check import main


if __name__ == "__main__":
    raise SystemExit(main())
