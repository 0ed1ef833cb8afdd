#!/usr/bin/env python3

import sys

from argonfan.cli import main

sys.exit(main())
