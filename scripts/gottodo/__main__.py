import sys

from gottodo.cli import main

sys.exit(main())
