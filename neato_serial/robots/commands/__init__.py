# neato_serial/robots/commands/__init__.py
from neato_serial.robots.commands.dseries_commands import DSeriesCommand
