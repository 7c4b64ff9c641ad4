# Banis-CLI.py
import sys

from banis.cli import main

if __name__ == "__main__":
    sys.exit(main())
