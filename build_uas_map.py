#!/usr/bin/env python3
import sys

from uas_map.build import main

if __name__ == "__main__":
    sys.exit(main())
