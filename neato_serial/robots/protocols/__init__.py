# neato_serial/robots/protocols/__init__.py
