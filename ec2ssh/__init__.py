"""ec2ssh - connect to EC2 instances by ID, private IP, or Name tag."""

__version__ = "0.4.0"
