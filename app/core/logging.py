import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure le logger racine (un seul handler stdout).
    Appelée à chaque create_app() : on remplace le handler au lieu d'empiler.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))

    for h in list(root.handlers):
        if getattr(h, "_drive_smart", False):
            root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._drive_smart = True  # type: ignore[attr-defined]
    root.addHandler(handler)
