#!/usr/bin/env python3
"""magnetlink - Magnet URI inspection from the command line."""

from __future__ import annotations

from magnetlink.cli.main import main

if __name__ == "__main__":
    main()
