import time

import pytest
from test.pytestutils import before

from jstack_profiler.metrics.with_timer import with_timer
from jstack_profiler.metrics.timer import Timer


class TargetClass:
    def __init__(self, timer):
        self.timer = timer

    @with_timer(phase="test-foo-wall")
    def foo_wall(self):
        time.sleep(0.001)
        return "result"

    @with_timer(phase="test-foo-failing")
    def foo_failing(self):
        raise RuntimeError("failed")


class TestWithTimer:
    @before
    def before(self):
        self.test_class = TargetClass(Timer())

    def test_it_times_wall_time(self):
        assert self.test_class.foo_wall() == "result"

        duration = self.test_class.timer.get_duration("test-foo-wall")
        assert (duration.counter == 1)
        assert (duration.max >= 0)
        assert (duration.total == duration.max)

    def test_it_records_the_time_when_the_method_raises(self):
        with pytest.raises(RuntimeError):
            self.test_class.foo_failing()

        assert (self.test_class.timer.get_duration("test-foo-failing").counter == 1)

    def test_it_does_nothing_without_a_timer(self):
        assert TargetClass(None).foo_wall() == "result"

    def test_it_keeps_the_name_of_the_method(self):
        assert TargetClass.foo_wall.__name__ == "foo_wall"

    def test_it_rejects_unknown_measurements(self):
        with pytest.raises(ValueError):
            with_timer("phase", measurement="unknown")
