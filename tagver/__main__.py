import sys

from tagver.derive_version import main

sys.exit(main())
