"""TID command implementation: mint or inspect timestamp identifiers."""

import argparse
from datetime import datetime, timezone

from lexgen.tid import TID

from ..errors import handle_cli_exception


def cmd_tid(args: argparse.Namespace) -> None:
    """
    Handle the 'tid' subcommand.

    Without ``--decode`` prints a new TID string (from ``--timestamp`` and
    ``--clock-id`` when given). With ``--decode`` prints the timestamp,
    its UTC time and the clock id of an existing TID.
    """
    try:
        if args.decode:
            tid = TID.decode(args.decode)
            moment = datetime.fromtimestamp(tid.timestamp / 1_000_000, tz=timezone.utc)
            print(f"timestamp: {tid.timestamp}")
            print(f"time:      {moment.isoformat()}")
            print(f"clock_id:  {tid.clock_id}")
            return
        print(TID.encode(args.timestamp, args.clock_id).string)
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))
