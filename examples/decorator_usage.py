"""examples/decorator_usage.py - qdebug as ordinary @decorators.

Run:
    python examples/decorator_usage.py
    cat ${TMPDIR:-/tmp}/q

Shows the three attachment forms side by side:

    @trace                      wrap at definition time
    time("parse_line")          rebind a module-level function by name
    trace(Parser, "tokenize")   rebind a method on a class
"""

import logging

from qdebug import q, time, trace

logging.basicConfig(level=logging.DEBUG)  # shows qdebug's own DEBUG diagnostics


@trace
def fib(n):
    return n if n < 2 else fib(n - 1) + fib(n - 2)


def parse_line(line):
    key, _, value = line.partition("=")
    return key.strip(), value.strip()


class Parser:
    def tokenize(self, text):
        return [parse_line(line) for line in text.splitlines() if line]


time("parse_line")
trace(Parser, "tokenize")
trace(Parser, "tokenize")  # second trace is ignored


if __name__ == "__main__":
    fib(4)
    pairs = Parser().tokenize("a = 1\nb = 2\n")
    print(dict(q(pairs)))
