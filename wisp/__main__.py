import sys

from wisp.cli import main

sys.exit(main())
