"""Test doubles for the inventory and launcher collaborators."""
