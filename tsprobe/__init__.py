"""Transport stream PID filtering, pcap extraction and related helpers."""

__version__ = "0.1.0"

__all__ = ["__version__"]