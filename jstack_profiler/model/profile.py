import logging

from functools import reduce

from jstack_profiler.metrics.with_timer import with_timer
from jstack_profiler.model.call_graph_node import CallGraphNode
from jstack_profiler.utils.recursion import ensure_recursion_limit

logger = logging.getLogger(__name__)


class Profile:
    def __init__(self, timer=None):
        """
        A profile holds one call graph per thread name, built from the sections of a single thread dump.

        :param timer: Timer used to record how long the call graphs take to merge; optional
        """
        self.timer = timer
        self.call_graphs_per_thread = {}
        self.total_section_count = 0
        self.max_stack_depth = 0

    def add(self, thread_name, call_stack, state):
        """
        Folds one call stack of a thread into the call graph of that thread.

        :param thread_name: name from the thread header line; several sections can share a name
        :param call_stack: list of frame names, outermost frame first
        :param state: ThreadState found in the section
        """
        if len(call_stack) > self.max_stack_depth:
            self.max_stack_depth = len(call_stack)
            # update, merge and filter recurse once per frame
            ensure_recursion_limit(self.max_stack_depth)

        root = self.call_graphs_per_thread.get(thread_name) or CallGraphNode.new_root()
        self.call_graphs_per_thread[thread_name] = root.update(call_stack, state)
        self.total_section_count += 1

    @with_timer("mergeCallGraphs")
    def merged_call_graph(self, call_stack_filter=None):
        """
        Merges the call graphs of all the threads into one, as if the whole dump came from a single thread.

        The filter is applied to the call graph of each thread before merging, as merging two leaves keeps a single
        thread state. Threads with no matching call stack are left out.

        :param call_stack_filter: predicate given to CallGraphNode.filter; default is None, nothing is filtered
        :return: the merged call graph; an empty root if there is no thread, None if the filter kept nothing
        """
        if self.is_empty():
            return CallGraphNode.new_root()

        call_graphs = self.call_graphs_per_thread.values()
        if call_stack_filter is not None:
            call_graphs = [filtered for filtered in (call_graph.filter(call_stack_filter) for call_graph in call_graphs)
                           if filtered is not None]
            if not call_graphs:
                return None
        return reduce(lambda merged, call_graph: merged.merge(call_graph), call_graphs)

    def threads_by_usage(self):
        """
        :return: list of (thread name, call graph) with the most sampled threads first, ties ordered by name
        """
        return sorted(self.call_graphs_per_thread.items(), key=lambda item: (-item[1].count, item[0]))

    def is_empty(self):
        return not self.call_graphs_per_thread

    def __str__(self):
        return "Profile(threads=" + str(len(self.call_graphs_per_thread)) \
               + ", sections=" + str(self.total_section_count) + ")"
