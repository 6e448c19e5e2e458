import os
import logging

from jstack_profiler.filters import build_call_stack_filter
from jstack_profiler.model.thread_state import ThreadState

logger = logging.getLogger(__name__)

FILTER_CONTAINS_ENV = "JSTACK_PROFILER_FILTER_CONTAINS"
FILTER_STATE_ENV = "JSTACK_PROFILER_FILTER_STATE"
LOG_LEVEL_ENV = "JSTACK_PROFILER_LOG_LEVEL"


def _get_filter_word(filter_word=None, env=os.environ):
    return filter_word or env.get(FILTER_CONTAINS_ENV) or None


def _get_filter_state(filter_state=None, env=os.environ):
    """
    :return: the ThreadState to filter on, or None; the command line value wins over the environment variable
    :raises InvalidThreadStateError: if the value is not a known state
    """
    token = filter_state or env.get(FILTER_STATE_ENV)
    if not token:
        return None
    return ThreadState.from_token(token.strip().upper())


def get_log_level(log_level=None, env=os.environ):
    return log_level or env.get(LOG_LEVEL_ENV)


def build_profiler(filter_word=None, filter_state=None, show_threads=False, output=None, env=os.environ,
                   profiler_factory=None, override=None):
    """
    Creates a Profiler object from given parameters or environment variables
    :param filter_word: keep only the call stacks where every frame contains this word, default is None
    :param filter_state: keep only the call stacks ending in this state token (e.g. "TIMED_WAITING"), default is None
    :param show_threads: also report the threads ranked by number of samples, default is False
    :param output: text stream the report is printed to, default is sys.stdout
    :param env: environment variables are used if parameters are not provided, default is os.environ
    :param profiler_factory: (For testing) function creating the profiler, default is Profiler
    :param override: a dictionary with possible extra entries for the profiler environment
    :return: a Profiler object
    :raises InvalidThreadStateError: if the state used for filtering is unknown
    """
    if profiler_factory is None:
        from jstack_profiler.profiler import Profiler
        profiler_factory = Profiler

    word = _get_filter_word(filter_word, env)
    state = _get_filter_state(filter_state, env)
    if word or state:
        logger.info("Filtering call stacks with word: {}, state: {}".format(word, state and state.name))

    environment = {
        "call_stack_filter": build_call_stack_filter(word=word, state=state),
        "show_threads": show_threads,
        "output": output
    }
    if override:
        environment.update(override)
    return profiler_factory(environment=environment)
