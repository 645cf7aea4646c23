"""
__init__.py

Initializes the robots package by importing the command definitions of every
supported robot model.
"""

from neato_serial.robots.commands.dseries_commands import DSeriesCommand

__all__ = [
    'DSeriesCommand'
]
