"""examples/basic_usage.py - qdebug in a typical debugging session.

Run:
    python examples/basic_usage.py
    cat ${TMPDIR:-/tmp}/q

Demonstrates:
    - Tracing a method and a recursive method on an existing object
    - Stacking a timer on top of a trace
    - Inspecting a value inline with Q()
"""

from qdebug import Q

# Q.DEBUG = False  # uncomment to turn every call below into a no-op


class Report:
    initial_value = 5

    def build(self, rows, factor):
        buffer = [self.initial_value] * rows
        return [item * factor for item in buffer]

    def factorial(self, n):
        if n < 1:
            return 1
        return n * self.factorial(n - 1)


if __name__ == "__main__":
    report = Report()
    Q.trace(report, "factorial")
    Q.trace(report, "build")
    Q.time(report, "build")

    print(Q(report.build(17_355, 57_291))[0])
    print(report.factorial(5))

    # Q.breakpoint("print")  # run under a debugger to stop before each print
