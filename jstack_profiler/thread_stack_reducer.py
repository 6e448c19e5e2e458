import logging

from jstack_profiler.dump_lexer import LineKind
from jstack_profiler.metrics.with_timer import with_timer
from jstack_profiler.model.profile import Profile
from jstack_profiler.model.thread_state import ThreadState

# used when frames show up before any thread header line
UNKNOWN_THREAD_NAME = ""

logger = logging.getLogger(__name__)


class ThreadStackReducer:
    """
    Consumes the classified lines of a dump and folds every thread section into the profile.

    The reducer keeps the thread name, the thread state and the call stack of the section being read. Stack frames
    are printed innermost first by jstack, so the call stack is reversed when the section gets folded. A blank line
    ends the section: if frames were found they are added to the profile, and the three fields are reset.
    """

    def __init__(self, profile=None, timer=None):
        self.timer = timer
        self.profile = profile if profile is not None else Profile(timer=timer)
        self._reset()

    @with_timer("reduceThreadDump")
    def reduce(self, dump_lines):
        """
        :param dump_lines: iterable of DumpLine, as produced by DumpLexer.tokenize
        :return: the profile, with all the complete sections added
        :raises InvalidThreadStateError: as soon as a state line holds an unknown state
        """
        for dump_line in dump_lines:
            self.consume(dump_line)

        if self._call_stack:
            logger.debug("Dropping {} frames of thread '{}' as the dump ended before the end of the section".format(
                len(self._call_stack), self._thread_name))
            self._reset()
        return self.profile

    def consume(self, dump_line):
        kind = dump_line.kind
        if kind is LineKind.THREAD_NAME:
            self._thread_name = dump_line.value
        elif kind is LineKind.STACK_FRAME:
            self._call_stack.append(dump_line.value)
        elif kind is LineKind.THREAD_STATE:
            self._state = ThreadState.from_token(dump_line.value)
        elif kind is LineKind.BLANK:
            self._end_section()

    def _end_section(self):
        if self._call_stack:
            call_stack = self._call_stack[::-1]
            logger.debug("Adding call stack of {} frames for thread '{}'".format(len(call_stack), self._thread_name))
            self.profile.add(self._thread_name, call_stack, self._state or ThreadState.RUNNABLE)
        self._reset()

    def _reset(self):
        self._thread_name = UNKNOWN_THREAD_NAME
        self._state = None
        self._call_stack = []
