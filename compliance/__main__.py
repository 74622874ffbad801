import sys

from compliance.run_validator import main

sys.exit(main())
