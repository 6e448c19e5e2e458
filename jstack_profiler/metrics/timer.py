from collections import namedtuple


class PhaseDuration(namedtuple("PhaseDuration", ["counter", "total", "max"])):
    """
    Durations, in seconds, recorded for one phase of a run.
    """
    __slots__ = ()

    def add(self, seconds):
        return PhaseDuration(self.counter + 1, self.total + seconds, max(self.max, seconds))

    @property
    def average(self):
        return 0 if self.counter == 0 else self.total / self.counter

    def __repr__(self):
        return "PhaseDuration(counter={}, total={:.5f}, max={:.5f}, average={:.5f})".format(
            self.counter, self.total, self.max, self.average)


NO_DURATION = PhaseDuration(counter=0, total=0, max=0)


class Timer:
    """
    Keeps the durations of the phases of a run (reducing the dump, merging the call graphs, ...).
    They are only logged at debug level, nothing else consumes them.
    """

    def __init__(self):
        self.durations = {}

    def record(self, phase, seconds):
        self.durations[phase] = self.durations.get(phase, NO_DURATION).add(seconds)

    def reset(self):
        self.durations = {}

    def get_duration(self, phase):
        return self.durations.get(phase)
