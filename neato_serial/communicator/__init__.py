# neato_serial/communicator/__init__.py
