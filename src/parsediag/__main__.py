import sys

from parsediag.cli import main

sys.exit(main())
