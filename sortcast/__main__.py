import sys

from sortcast.cli import main

sys.exit(main())
