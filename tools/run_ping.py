# tools/run_ping.py
# One ping command outside the interactive shell; flags are the shell's.
# Usage examples:
#   sudo python3 -m tools.run_ping 8.8.8.8
#   sudo python3 -m tools.run_ping 8.8.8.8 -n 10 -l 64 "|" out
#   python3 -m tools.run_ping fake -n 3 --summary
#
# Ctrl+C ends a running session early (statistics are still printed).

import json
import argparse
import logging
import signal
from pingshell.cancel import CancellationToken
from pingshell.config import Settings
from pingshell.errors import PingError
from pingshell.options import parse_ping_args
from pingshell.session.controller import PingSession
from pingshell.shell.console import Console

def make_prober(args):
    if args.target == "fake":
        from pingshell.prober.fake import FakeProber
        return FakeProber.always(rtt_ms=10)
    from pingshell.prober.scapy_icmp import ScapyProber
    return ScapyProber()

def run(args, ping_args):
    s = Settings(interval_ms=args.interval_ms)
    console = Console()
    host = "127.0.0.1" if args.target == "fake" else args.target
    try:
        options = parse_ping_args([host] + ping_args, settings=s)
    except PingError as e:
        console.error(str(e))
        return 2

    token = CancellationToken()
    signal.signal(signal.SIGINT, lambda signum, frame: token.cancel())
    res = PingSession(make_prober(args), options, console, token=token, settings=s).run()

    if args.summary:
        print(json.dumps({
            "target": options.host,
            "state": res.state.value,
            "sent": res.stats.sent,
            "received": res.stats.received,
            "loss_percent": res.stats.loss_percent,
            "min_ms": res.stats.min_rtt_ms,
            "max_ms": res.stats.max_rtt_ms,
            "avg_ms": res.stats.average_rtt_ms,
            "saved_path": res.saved_path,
        }, indent=2))
    return 0

def build_argparser():
    ap = argparse.ArgumentParser(description="Run one ping session")
    ap.add_argument("target", help="Destination host/IP (or 'fake' to use FakeProber)")
    ap.add_argument("--interval-ms", type=int, default=Settings.interval_ms, help="Pause between probes (milliseconds)")
    ap.add_argument("--summary", action="store_true", help="Print a JSON summary after the transcript")
    ap.add_argument("--log-level", default=Settings.log_level, help="Logging level")
    return ap

if __name__ == "__main__":
    ap = build_argparser()
    args, ping_args = ap.parse_known_args()
    logging.basicConfig(level=args.log_level)
    raise SystemExit(run(args, ping_args))
