"""Package entry point.

Preferred invocation is via the installed console script:

    penguin-eda ...

For convenience we also support:

    python -m penguin_eda ...
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    """Entry point used by `python -m penguin_eda`."""

    app()


if __name__ == "__main__":
    main()
