import logging
import sys

from jstack_profiler.reporter.reporter import Reporter

FRAME_PREFIX = " + "

logger = logging.getLogger(__name__)


class ConsoleReporter(Reporter):
    """
    Prints the critical path, one frame per line prefixed with " + ", e.g.

         + java.lang.Thread.run(Thread.java:748)
         + com.example.Worker.run(Worker.java:42)
         + java.lang.Thread.sleep(Native Method)
    """

    def __init__(self, environment=dict()):
        """
        :param environment: dependency container dictionary for the current profiler
        :param output: (inside environment) text stream to print to; default is sys.stdout
        :param show_threads: (inside environment) also print the threads ranked by samples; default is False
        """
        self._output = environment.get("output") or sys.stdout
        self._show_threads = environment.get("show_threads", False)

    def report(self, critical_path, profile=None):
        if self._show_threads and profile is not None:
            self._print_threads(profile)

        if not critical_path:
            logger.info("Nothing to report, the critical path is empty")
            return False
        for frame_name in critical_path:
            print(FRAME_PREFIX + frame_name, file=self._output)
        return True

    def _print_threads(self, profile):
        print("Threads by samples:", file=self._output)
        for thread_name, call_graph in profile.threads_by_usage():
            print("{:>8} \"{}\"".format(call_graph.count, thread_name), file=self._output)
        print("Critical path:", file=self._output)
