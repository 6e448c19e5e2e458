import io

import pytest
from mock import MagicMock

from test.help_utils import write_dump, SAMPLE_DUMP_CRITICAL_PATH, MAIN, LOCK_SUPPORT_PARK, UNSAFE_PARK
from test.pytestutils import before

from jstack_profiler.__main__ import main
from jstack_profiler.model.thread_state import InvalidThreadStateError
from jstack_profiler.profiler_builder import FILTER_STATE_ENV


class TestMain:
    @before
    def before(self, tmp_path):
        self.dump_file = write_dump(tmp_path)
        self.output = io.StringIO()

    def test_it_prints_the_critical_path(self):
        critical_path = main(input_args=[self.dump_file], env={}, output=self.output)

        assert critical_path == SAMPLE_DUMP_CRITICAL_PATH
        assert self.output.getvalue().splitlines() == [" + " + frame for frame in SAMPLE_DUMP_CRITICAL_PATH]

    def test_without_arguments_it_prints_the_usage_only(self):
        profiler_builder = MagicMock()

        result = main(input_args=[], env={}, output=self.output, profiler_builder=profiler_builder)

        assert result is None
        assert self.output.getvalue().startswith("usage: jstack-profiler")
        assert len(self.output.getvalue().splitlines()) == 1
        profiler_builder.assert_not_called()

    def test_it_passes_the_options_to_the_profiler_builder(self):
        profiler_builder = MagicMock()
        env = {}

        main(input_args=["--contains", "example", "--state", "BLOCKED", "--threads", "--log", "info",
                         self.dump_file], env=env, output=self.output, profiler_builder=profiler_builder)

        profiler_builder.assert_called_once_with(filter_word="example", filter_state="BLOCKED", show_threads=True,
                                                 output=self.output, env=env)
        profiler_builder.return_value.run.assert_called_once_with(self.dump_file)

    def test_it_filters_on_the_state(self):
        critical_path = main(input_args=["--state", "WAITING", self.dump_file], env={}, output=self.output)

        assert critical_path == [MAIN, LOCK_SUPPORT_PARK, UNSAFE_PARK]

    def test_it_can_take_the_filter_from_env(self):
        critical_path = main(input_args=[self.dump_file], env={FILTER_STATE_ENV: "BLOCKED"}, output=self.output)

        assert critical_path == []
        assert self.output.getvalue() == ""

    def test_it_prints_the_threads_when_asked(self):
        main(input_args=["--threads", self.dump_file], env={}, output=self.output)

        lines = self.output.getvalue().splitlines()
        assert lines[0] == "Threads by samples:"
        assert lines[-len(SAMPLE_DUMP_CRITICAL_PATH):] == [" + " + frame for frame in SAMPLE_DUMP_CRITICAL_PATH]

    def test_when_the_file_is_missing_it_raises(self, tmp_path):
        with pytest.raises(OSError):
            main(input_args=[str(tmp_path / "missing.txt")], env={}, output=self.output)

        assert self.output.getvalue() == ""

    def test_an_unknown_state_in_the_dump_raises_without_printing(self, tmp_path):
        bad_dump = write_dump(tmp_path, content='"main"\n   java.lang.Thread.State: FOO\n\tat a.A.a(A.java:1)\n\n',
                              file_name="bad.txt")

        with pytest.raises(InvalidThreadStateError):
            main(input_args=[bad_dump], env={}, output=self.output)

        assert self.output.getvalue() == ""
