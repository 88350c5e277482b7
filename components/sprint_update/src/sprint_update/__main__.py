import sys

from sprint_update.cli import main

if __name__ == "__main__":
    sys.exit(main())
