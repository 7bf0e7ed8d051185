import sys

from travel_booking.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
