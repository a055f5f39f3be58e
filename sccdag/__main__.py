"""Allow ``python -m sccdag``."""

from sccdag.cli import main

if __name__ == "__main__":
    main()
