import sys

from ownership.main import main

sys.exit(main())
