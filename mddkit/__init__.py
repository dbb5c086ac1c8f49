"""Device-driver helpers: CAN payload packing, a minimal serial packager, an int-keyed map, process priority, real-time synchronization and small utilities."""

__version__ = "0.1.0"