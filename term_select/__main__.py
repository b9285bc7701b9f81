import sys

from term_select.main import main

if __name__ == "__main__":
    sys.exit(main())
