#!/usr/bin/env python3
# Entry point: python -m binbreak

import logging
import sys
from typing import List, Optional

from rich.console import Console

from .app import run_app
from .config import parse_config
from .log import LOGGER_NAME, setup_logging
from .menu import LAST_SELECTED, StartMenuState
from .terminal import TerminalBackend

console = Console(highlight=False, soft_wrap=False, stderr=True)
log = logging.getLogger(LOGGER_NAME)


def main(argv: Optional[List[str]] = None) -> int:
    cfg = parse_config(argv)
    stream = setup_logging(cfg.log_file)
    try:
        with TerminalBackend() as backend:
            run_app(backend, cfg, lambda: StartMenuState.create(cfg, LAST_SELECTED))
    except OSError as e:
        # terminal I/O failed; the session is unusable
        log.exception("terminal I/O failure")
        console.print(f"[red]Terminal error:[/red] {e}")
        return 1
    except KeyboardInterrupt:
        console.print("[dim]Bye.[/dim]")
    finally:
        if stream is not None:
            stream.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
