"""Ground-segment tools: NaCl primitives, firmware image search, stdbuf logging, VTS streaming, VictoriaMetrics push and time sync."""

__version__ = "0.1.0"