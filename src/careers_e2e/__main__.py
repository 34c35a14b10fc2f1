import sys

from careers_e2e.cli import main

sys.exit(main())
