"""Allow running as: python -m lead_validator"""

import sys

from lead_validator.cli import main

if __name__ == "__main__":
    sys.exit(main())
