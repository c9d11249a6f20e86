import sys

from bleed_squares.cli import main

sys.exit(main())
