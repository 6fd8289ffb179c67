import sys

from card_counter.frameworks.cli import main


if __name__ == "__main__":
    sys.exit(main())
