#!/usr/bin/env python3
"""Build and install peppemon from this source tree: ``python install.py``."""

from peppemon_installer.main import main

if __name__ == "__main__":
    main()
