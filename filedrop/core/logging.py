import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure le logging racine (stdout). Appelé une fois par create_app.
    Niveau inconnu → INFO. Les handlers déjà installés par l'hôte sont conservés.
    """
    numeric = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, stream=sys.stdout)
    root.setLevel(numeric)

    # uvicorn garde ses propres handlers, on aligne juste le niveau
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(numeric)
