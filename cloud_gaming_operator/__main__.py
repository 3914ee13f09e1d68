import sys

from cloud_gaming_operator.cli import main

sys.exit(main())
