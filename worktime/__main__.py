import sys

from worktime.ui.app import main

if __name__ == "__main__":
    sys.exit(main())
