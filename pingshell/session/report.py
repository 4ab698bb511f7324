# pingshell/session/report.py
from typing import List

from pingshell.schemas import ProbeOutcome
from pingshell.session.state import StatisticsSnapshot


def header_line(host: str, buffer_size: int) -> str:
    return f"Pinging {host} with {buffer_size} bytes of data:"


def outcome_line(outcome: ProbeOutcome, buffer_size: int) -> str:
    if outcome.get("status") == "success":
        return (f"Reply from {outcome['address']}: bytes={buffer_size} "
                f"time={outcome['rtt_ms']}ms TTL={outcome['ttl']}")
    return f"Request timed out: {outcome.get('reason')}"


def statistics_lines(host: str, stats: StatisticsSnapshot) -> List[str]:
    """
    The closing block, starting with a blank separator line. The loss
    percentage is left out when nothing was sent, the round trip times when
    nothing came back.
    """
    packets = f"    Packets: Sent = {stats.sent}, Received = {stats.received}, Lost = {stats.lost}"
    if stats.loss_percent is not None:
        packets += f" ({stats.loss_percent}% loss)"

    lines = ["", f"Ping statistics for {host}:", packets]
    if stats.received > 0:
        lines.append("Approximate round trip times in milli-seconds:")
        lines.append(f"    Minimum = {stats.min_rtt_ms}ms, Maximum = {stats.max_rtt_ms}ms, "
                     f"Average = {stats.average_rtt_ms}ms")
    return lines
