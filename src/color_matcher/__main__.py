"""エントリーポイント: python -m color_matcher"""

import sys

from color_matcher.cli import main

if __name__ == "__main__":
    sys.exit(main())
