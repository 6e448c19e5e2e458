import re

from collections import namedtuple
from enum import Enum

THREAD_NAME_REGEX = re.compile(r'^"([^"]+)"')
STACK_FRAME_REGEX = re.compile(r"^\s+at\s+(.*\S)\s*$")
THREAD_STATE_REGEX = re.compile(r"^\s+java\.lang\.Thread\.State:\s+(\w+)")


class LineKind(Enum):
    THREAD_NAME = "thread_name"
    STACK_FRAME = "stack_frame"
    THREAD_STATE = "thread_state"
    BLANK = "blank"
    OTHER = "other"


DumpLine = namedtuple("DumpLine", ["kind", "value", "line_no"])


class DumpLexer:
    """
    Classifies the lines of a jstack thread dump. For instance this section:

        "pool-1-thread-3" #14 prio=5 os_prio=0 tid=0x00007f nid=0x2b03 waiting on condition [0x00007f]
           java.lang.Thread.State: TIMED_WAITING (sleeping)
                at java.lang.Thread.sleep(Native Method)
                at com.example.Worker.run(Worker.java:42)
                - locked <0x000000076b> (a java.lang.Object)

    gives a THREAD_NAME line with value "pool-1-thread-3", a THREAD_STATE line with value "TIMED_WAITING", two
    STACK_FRAME lines with the frame descriptors as values, an OTHER line and then the BLANK line ending the section.

    The state token is not validated here, this is left to ThreadState.from_token.
    """

    def tokenize(self, lines):
        """
        :param lines: iterable of lines (trailing new line characters are ignored), e.g. an opened file
        :return: generator of DumpLine
        """
        for line_no, line in enumerate(lines, start=1):
            yield self.classify(line.rstrip("\r\n"), line_no)

    @staticmethod
    def classify(line, line_no=None):
        match = THREAD_NAME_REGEX.match(line)
        if match:
            return DumpLine(LineKind.THREAD_NAME, match.group(1), line_no)
        match = STACK_FRAME_REGEX.match(line)
        if match:
            return DumpLine(LineKind.STACK_FRAME, match.group(1), line_no)
        match = THREAD_STATE_REGEX.match(line)
        if match:
            return DumpLine(LineKind.THREAD_STATE, match.group(1), line_no)
        if not line.strip():
            return DumpLine(LineKind.BLANK, None, line_no)
        return DumpLine(LineKind.OTHER, line, line_no)
