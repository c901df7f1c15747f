#!/usr/bin/env python
"""CLI entry point for the SH lobe viewer."""

from sh_lobes.viewer import main

if __name__ == "__main__":
    main()
