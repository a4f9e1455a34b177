"""
Neon Pong - deterministic simulation core of a neon Pong game with power-ups
and a scripted AI opponent
"""

__version__ = "0.1.0"
