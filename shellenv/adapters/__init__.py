"""
Adapters: the I/O edge between the engine and the outside world.
"""
