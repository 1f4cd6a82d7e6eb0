"""Runnable walkthrough of issuing and scanning a token."""
