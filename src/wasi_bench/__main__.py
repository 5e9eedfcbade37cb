#!/usr/bin/env python3
"""
Module entry point: python -m wasi_bench <num_iterations> <enable_stack_trace>
"""

import sys

from .main import main

sys.exit(main())
