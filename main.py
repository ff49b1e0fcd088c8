"""Mouse Wiggler — Entry point."""
import sys

from wiggler.app import main


if __name__ == "__main__":
    sys.exit(main())
