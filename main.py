# main.py
import sys

from eb_route.app.cli import main

if __name__ == "__main__":
    sys.exit(main())
