import logging
import sys


class FilterOtherPkgs(logging.Filter):
    """ let our own records through, and third-party ones (spotipy, urllib3) only from WARNING up """
    def filter(self, record: logging.LogRecord):
        return (
            record.name.split(".")[0] == __package__
            or record.levelno >= logging.WARNING
        )


def configure_logging(level: int = logging.INFO) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(FilterOtherPkgs())
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)
    return handler
