"""Allow ``python -m diffcover``."""

from diffcover.cli import main

if __name__ == "__main__":
    main()
