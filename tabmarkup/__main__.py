import sys

from tabmarkup.cli import main

sys.exit(main())
