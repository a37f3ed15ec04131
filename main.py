#!/usr/bin/env python3
"""
Prompt Playground - Console report for playground sessions.

Examples:
    python main.py --product "Sony WH-1000XM5"
    python main.py --batched --samples 4 --compare
    python main.py --repeat 3 --compare --provider mock
"""

import sys

from prompt_playground.report import main


if __name__ == "__main__":
    sys.exit(main())
