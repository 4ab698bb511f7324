from dataclasses import dataclass

@dataclass
class Settings:
    count: int = 4
    ttl: int = 128
    timeout_ms: int = 5000
    buffer_size: int = 32
    max_buffer_size: int = 65500

    # pause between probes, and how often a pending probe checks for Ctrl+C
    interval_ms: int = 1000
    probe_poll_ms: int = 50

    loopback: str = "127.0.0.1"
    default_extension: str = ".txt"  # appended to "| name" targets without one

    log_level: str = "WARNING"
