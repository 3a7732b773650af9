#!/usr/bin/env python3
# cmdprompt/__main__.py
import sys

from cmdprompt.cli import main

sys.exit(main())
