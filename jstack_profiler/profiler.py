import logging

from jstack_profiler.console_reporter.console_reporter import ConsoleReporter
from jstack_profiler.dump_lexer import DumpLexer
from jstack_profiler.metrics.timer import Timer
from jstack_profiler.thread_stack_reducer import ThreadStackReducer

DEFAULT_ENCODING = "utf-8"

logger = logging.getLogger(__name__)


class Profiler:
    """
    Reads a jstack thread dump, builds one call graph per thread, merges them into a single call graph and reports
    the most sampled chain of calls (the critical path).
    """

    def __init__(self, environment=dict()):
        """
        :param environment: dependency container dictionary for the current profiler. Possible keys:
            - timer: Timer collecting the duration of each phase (default: new Timer)
            - reporter: Reporter receiving the critical path (default: ConsoleReporter(environment))
            - call_stack_filter: predicate given to CallGraphNode.filter before computing the critical path,
                                 see jstack_profiler.filters (default: None, nothing is filtered)
            - encoding: encoding of the dump file (default: "utf-8")
            - lexer: DumpLexer used to classify the lines (default: DumpLexer())
        """
        self.timer = environment.get("timer") or Timer()
        self.reporter = environment.get("reporter") or ConsoleReporter(environment)
        self.call_stack_filter = environment.get("call_stack_filter")
        self.encoding = environment.get("encoding") or DEFAULT_ENCODING
        self.lexer = environment.get("lexer") or DumpLexer()

    def profile(self, dump_file_path):
        """
        :return: the Profile with one call graph per thread found in the dump
        :raises OSError: if the dump cannot be read
        :raises InvalidThreadStateError: if the dump contains an unknown thread state
        """
        logger.info("Profiling thread dump '{}'".format(dump_file_path))
        with open(dump_file_path, "r", encoding=self.encoding, errors="replace") as dump_file:
            return self.profile_lines(dump_file)

    def profile_lines(self, lines):
        reducer = ThreadStackReducer(timer=self.timer)
        return reducer.reduce(self.lexer.tokenize(lines))

    def critical_path(self, profile):
        call_graph = profile.merged_call_graph(call_stack_filter=self.call_stack_filter)
        if call_graph is None:
            logger.info("No call stack matches the filter")
            return []
        return call_graph.critical_path()

    def run(self, dump_file_path):
        """
        Profiles the dump and reports its critical path.

        :return: the critical path, as a list of frame names
        """
        profile = self.profile(dump_file_path)
        if profile.is_empty():
            logger.info("No thread stack found in '{}'".format(dump_file_path))
        critical_path = self.critical_path(profile)
        self.reporter.report(critical_path, profile=profile)
        logger.debug("Run durations: " + str(self.timer.durations))
        return critical_path
