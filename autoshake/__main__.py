import sys

from autoshake.main import main

sys.exit(main())
