import sys

from mrstat.cli import main

sys.exit(main())
