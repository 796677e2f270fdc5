import sys

from ragcheck.cli import main

sys.exit(main())
