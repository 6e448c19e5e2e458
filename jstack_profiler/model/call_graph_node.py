from types import MappingProxyType as UnmodifiableDict

from jstack_profiler.model.frame import Frame
from jstack_profiler.model.thread_state import ThreadState

ROOT_NODE_NAME = "root"
SYNTHETIC_ROOT_SEPARATOR = "#"


class CallGraphNode:
    # Python magic: By declaring which fields/slots this class is going to have in advance, Python dispenses with the
    # internal dictionary where these are usually stored, which noticeably improves memory footprint for dumps with
    # thousands of threads.
    #
    # Note that of course these need to be maintained in sync with the fields being used by the class.
    __slots__ = ("_name", "_state", "_count", "_descendants", "_frame")

    def __init__(self, name=ROOT_NODE_NAME, state=ThreadState.RUNNABLE, count=1, descendants=None):
        """
        A node represents a given stack frame at a given position in the call stacks of one or more threads:
        * it can have descendants -- frames that were observed to be called by this frame in some stacks
        * it does not keep a reference to its parent
        * it counts how many call stacks passed through it, including the stacks ending on it

        Nodes are immutable: update, merge and filter always build and return new nodes, unchanged subtrees are shared
        between the old and the new tree. Callers may keep references to previous versions.

        :param name: frame descriptor, e.g. "com.example.Worker.run(Worker.java:42)", or "root" for a thread root
        :param state: thread state observed at the end of the stack; only meaningful for leaves
        :param count: number of call stacks that passed through this node
        :param descendants: dictionary of child frame name to child node
        """
        self._name = name
        self._state = state
        self._count = count
        self._descendants = UnmodifiableDict(dict(descendants) if descendants else {})
        self._frame = None

    @classmethod
    def new_root(cls):
        """
        An empty thread root: nothing was sampled yet so its count is 0.
        """
        return cls(ROOT_NODE_NAME, ThreadState.RUNNABLE, count=0)

    @property
    def name(self):
        return self._name

    @property
    def state(self):
        return self._state

    @property
    def count(self):
        return self._count

    @property
    def descendants(self):
        return self._descendants

    @property
    def frame(self):
        if self._frame is None:
            self._frame = Frame.from_name(self._name)
        return self._frame

    @property
    def package_name(self):
        return self.frame.package_name

    @property
    def class_name(self):
        return self.frame.class_name

    @property
    def method_name(self):
        return self.frame.method_name

    @property
    def file_name(self):
        return self.frame.file_name

    @property
    def line_no(self):
        return self.frame.line_no

    def is_leaf(self):
        return not self._descendants

    def update(self, call_stack, state):
        """
        Folds one call stack into the graph, creating the missing nodes on the way.

        :param call_stack: sequence of frame names, outermost (first called) frame first
        :param state: thread state captured with the stack, stored on the node where the stack ends
        :return: a new node with the stack added; every node on the path has its count increased by one
        """
        if not call_stack:
            return CallGraphNode(self._name, state, self._count + 1, self._descendants)

        next_call = self._descendants.get(call_stack[0]) or CallGraphNode(call_stack[0], count=0)
        new_next_call = next_call.update(call_stack[1:], state)

        descendants = dict(self._descendants)
        descendants[new_next_call.name] = new_next_call
        return CallGraphNode(self._name, self._state, self._count + 1, descendants)

    def merge(self, other):
        """
        Merges two call graphs together, e.g. to look at a pool of threads as a single one.

        When both nodes have the same name their descendants are merged recursively and their counts are summed.
        Otherwise a synthetic node named "<name>#<other name>" is created with both graphs as its children; this is
        expected when merging graphs of unrelated roots and is not an error.
        """
        if self._name != other.name:
            return CallGraphNode(self._name + SYNTHETIC_ROOT_SEPARATOR + other.name, ThreadState.RUNNABLE,
                                 self._count + other.count, {self._name: self, other.name: other})

        # iterate over the smaller dictionary only
        if len(self._descendants) < len(other.descendants):
            smallest, biggest = self._descendants, other.descendants
        else:
            smallest, biggest = other.descendants, self._descendants

        descendants = dict(biggest)
        for name, node in smallest.items():
            existing = descendants.get(name)
            descendants[name] = node if existing is None else existing.merge(node)

        return CallGraphNode(self._name, self._merged_state(other), self._count + other.count, descendants)

    def _merged_state(self, other):
        if self._state == other.state:
            return self._state
        if self._count != other.count:
            return self._state if self._count > other.count else other.state
        return min(self._state, other.state, key=ThreadState.rank)

    def critical_path(self):
        """
        Returns the most sampled chain of frame names, without the name of this (root) node.

        At each level the child with the highest count is selected; children with the same count are ordered by name
        so the result does not depend on insertion order.
        """
        path = []
        node = self
        while node._descendants:
            node = min(node._descendants.values(), key=_most_sampled_first)
            path.append(node.name)
        return path

    def filter(self, predicate):
        """
        Keeps only the branches for which the predicate holds.

        The predicate is called once per leaf with the list of nodes from the first node below this one down to the
        leaf (included). Branches that do not match are removed; a node losing all of its descendants is removed too.
        Counts of the remaining nodes are recomputed from their remaining descendants.

        :param predicate: function taking a list of CallGraphNode and returning a bool
        :return: the filtered node, or None if no branch matched
        """
        return self._filter(predicate, ())

    def _filter(self, predicate, call_stack):
        if not self._descendants:
            return self if predicate(list(call_stack)) else None

        descendants = {}
        for child in self._descendants.values():
            filtered_child = child._filter(predicate, call_stack + (child,))
            if filtered_child is not None:
                descendants[filtered_child.name] = filtered_child

        if not descendants:
            # propagate the deletion to the parent
            return None
        return CallGraphNode(self._name, self._state, sum(node.count for node in descendants.values()), descendants)

    def leaves(self):
        """
        Yields (path, leaf) for every leaf below this node, the path being the tuple of frame names without this
        node's name.
        """
        stack = [((), self)]
        while stack:
            path, node = stack.pop()
            if not node._descendants:
                yield path, node
                continue
            for child in node._descendants.values():
                stack.append((path + (child.name,), child))

    def paths(self):
        return sorted(path for path, _ in self.leaves())

    def __repr__(self):
        return "{}(name={!r}, state={}, count={}, descendants={})".format(
            self.__class__.__name__, self._name, self._state.name, self._count, len(self._descendants))


def _most_sampled_first(node):
    return -node.count, node.name
