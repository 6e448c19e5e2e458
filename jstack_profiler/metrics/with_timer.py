from functools import wraps
from time import perf_counter
from time import process_time

MEASUREMENTS = {
    "cpu-time": process_time,
    "wall-clock-time": perf_counter
}


def with_timer(phase, measurement="wall-clock-time"):
    """
    Records the duration of the decorated method as the given phase into the Timer of its instance, found in its
    ``timer`` attribute.
    Nothing is recorded when the instance has no timer.
    """
    get_time_seconds = MEASUREMENTS.get(measurement)
    if get_time_seconds is None:
        raise ValueError("Unexpected measurement mode for timer '{}'".format(measurement))

    def wrapper(fn):
        @wraps(fn)
        def timed(self, *args, **kwargs):
            if self.timer is None:
                return fn(self, *args, **kwargs)
            time_start_seconds = get_time_seconds()
            try:
                return fn(self, *args, **kwargs)
            finally:
                self.timer.record(phase, get_time_seconds() - time_start_seconds)

        return timed

    return wrapper
