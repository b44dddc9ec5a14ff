import logging
import sys


#---------------------------------------------------------------------------#
#   Logging                                                                 #
#       Every module logs under the "Pixiv" root logger. Importing the     #
#   package attaches nothing but a NullHandler, call `enable_logging`      #
#   to get console (and optionally file) output.                           #
#---------------------------------------------------------------------------#

_logstrfmt = "{asctime}|{name}|{levelname:^7s}| {message}"
_logtimefmt = "%H:%M:%S"
_filetimefmt = "%Y-%m-%d %H:%M:%S"

_console_formatter = logging.Formatter(_logstrfmt, _logtimefmt, "{")
_file_formatter = logging.Formatter(_logstrfmt, _filetimefmt, "{")

_pxvroot = logging.getLogger("Pixiv")
_pxvroot.addHandler(logging.NullHandler())

pxlog = _pxvroot    #   Alias


def enable_logging(level=logging.INFO, logfile=None):
    """
    Attach console and file handlers to the "Pixiv" logger.

    Args:
        level       int
            Logging level of the "Pixiv" logger.
        logfile     string
            Path of a log file, opened in append mode. Skipped when empty.

    Returns:
        list of attached handlers, pass them to `disable_logging` to detach.

    Raises:
        OSError
            The log file cannot be opened.
    """
    handlers = []
    console_hdl = logging.StreamHandler(sys.stdout)
    console_hdl.setFormatter(_console_formatter)
    handlers.append(console_hdl)
    if logfile:
        file_hdl = logging.FileHandler(logfile, "a+", "utf-8")
        file_hdl.setFormatter(_file_formatter)
        handlers.append(file_hdl)

    _pxvroot.setLevel(level)
    for hdl in handlers:
        _pxvroot.addHandler(hdl)
    return handlers

def disable_logging(handlers):
    """Detach handlers returned by `enable_logging` and close them."""
    for hdl in handlers:
        _pxvroot.removeHandler(hdl)
        hdl.close()
