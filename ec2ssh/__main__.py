#!/usr/bin/env python3
"""Run ec2ssh as ``python -m ec2ssh``."""

from ec2ssh.cli.main import main

if __name__ == "__main__":
    main()
