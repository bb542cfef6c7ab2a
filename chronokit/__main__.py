"""Demo: python -m chronokit [seconds]

Runs a stopwatch alongside a countdown with progress reporting, records
a lap when the countdown fires, then prints the elapsed time.  Ctrl+C
cancels both through a shared CancelToken.
"""

import logging
import signal
import sys
import threading

from PyQt6.QtCore import QCoreApplication, QTimer

from .log import setup_logging
from .settings import load_settings
from .timer import CancelToken, Countdown, Stopwatch, TimerError, format_duration

logger = logging.getLogger(__name__)


def _print_progress(channel) -> None:
    for fraction in channel:
        print(f"progress {fraction:6.1%}")


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    settings = load_settings()
    setup_logging(settings.log_level)

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    token = CancelToken()
    stopwatch = Stopwatch()

    def on_complete() -> None:
        split = stopwatch.lap()
        print(f"countdown complete, lap at {format_duration(split)} ({split:.3f}s)")

    try:
        seconds = float(argv[0]) if argv else settings.demo_countdown_seconds
        countdown = Countdown.from_settings(
            seconds, on_complete, settings, report_progress=True,
        )
        countdown.start(token)
    except (TimerError, TypeError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    logger.info("running a %.1fs countdown, tick %dms", seconds, settings.tick_interval_ms)
    countdown.completed.connect(app.quit)
    countdown.cancelled.connect(app.quit)
    stopwatch.start(token)

    consumer = threading.Thread(
        target=_print_progress, args=(countdown.progress(),), daemon=True,
    )
    consumer.start()

    previous_handler = signal.signal(signal.SIGINT, lambda *_: token.cancel())
    # Python signal handlers only run while the interpreter holds control
    wakeup = QTimer()
    wakeup.timeout.connect(lambda: None)
    wakeup.start(200)

    try:
        if countdown.is_running:
            app.exec()
    finally:
        wakeup.stop()
        signal.signal(signal.SIGINT, previous_handler)
    stopwatch.stop()
    consumer.join(timeout=1.0)

    print(f"elapsed {format_duration(stopwatch.elapsed())} ({stopwatch.elapsed():.3f}s)")
    print(f"countdown {countdown.state.value}, laps {stopwatch.laps}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
