"""Allow ``python -m slatemark``."""

from slatemark.cli import main

if __name__ == "__main__":
    main()
