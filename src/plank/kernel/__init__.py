"""Kernel – errors and time ports shared by every plank layer."""
