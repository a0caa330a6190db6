from timestats import Profiler


class FakeClock:
    """
    Stand-in for ``time.time`` so timing assertions are exact.

    Steps are binary fractions (0.25, 0.125, ...) to keep float deltas exact.
    """
    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds
        return self.now


def build_nested_profiler(clock, color_schema=None):
    """
    outer (1.0s)
      checkpoint (0.25s)
      inner (0.5s)
    tail (1.125s, measured from outer's start)
    """
    ts = Profiler(color_schema=color_schema)
    ts.profile(begin="outer")
    clock.advance(0.25)
    ts.profile("checkpoint")
    ts.profile(begin="inner")
    clock.advance(0.5)
    ts.profile(end="inner")
    clock.advance(0.25)
    ts.profile(end="outer")
    clock.advance(0.125)
    ts.profile("tail")
    return ts
