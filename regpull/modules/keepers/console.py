# console.py
# Terminal output for pulls: progress lines and optional log capture

import sys

from regpull.modules.formatters import humanize


LINE_WIDTH = 40

# True while a \r progress line is on screen without its newline
_line_open = False


# split output to file and stdout
class Tee:
    """Duplicate stdout/stderr to a file and the console."""
    def __init__(self, *files):
        self.files = files
    def write(self, data):
        for f in self.files:
            f.write(data)
    def flush(self):
        for f in self.files:
            f.flush()


def _rewrite_line(text):
    sys.stdout.write("\r" + " " * LINE_WIDTH)
    sys.stdout.write("\r" + text)
    sys.stdout.flush()


def print_progress(label, done, total):
    """Redraw '<label>:Downloading 3MB/10MB' in place."""
    global _line_open
    _line_open = True
    _rewrite_line(f"{label}:Downloading {humanize(done)}/{humanize(total)}")


def print_complete(label):
    global _line_open
    _line_open = False
    _rewrite_line(f"{label}:Download complete!")
    sys.stdout.write("\n")


def print_skipped(label):
    print(f"{label}:Already exists")


def end_line():
    """Terminate a progress line left open by an aborted transfer."""
    global _line_open
    if _line_open:
        sys.stdout.write("\n")
        sys.stdout.flush()
        _line_open = False
