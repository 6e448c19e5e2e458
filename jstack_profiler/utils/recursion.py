import sys
import logging

# frames used by the callers of the recursive call graph operations
RECURSION_LIMIT_MARGIN = 1000

logger = logging.getLogger(__name__)


def ensure_recursion_limit(depth):
    """
    Raises the interpreter recursion limit so that a recursion of the given depth can run, e.g. over the call graph
    of a thread that died with a StackOverflowError. The limit is never lowered.

    :param depth: number of nested calls needed
    :return: the recursion limit in place
    """
    needed = depth + RECURSION_LIMIT_MARGIN
    current = sys.getrecursionlimit()
    if needed <= current:
        return current
    logger.debug("Raising recursion limit from {} to {} for call stacks of {} frames".format(current, needed, depth))
    sys.setrecursionlimit(needed)
    return needed
