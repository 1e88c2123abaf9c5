import sys

from cwaweather.cli import main

sys.exit(main())
